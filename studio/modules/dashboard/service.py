from studio.config import settings
from studio.modules.dashboard.schemas import DashboardSummary
from studio.modules.deployments.service import DeploymentService
from studio.modules.logs.service import LogService


class DashboardService:
    def __init__(self, deployment_service: DeploymentService, log_service: LogService):
        self.deployment_service = deployment_service
        self.log_service = log_service

    def get_summary(self, user_id: str) -> DashboardSummary:
        """Deployment health counts and the most recent log entries"""
        deployments = self.deployment_service.list_deployments(user_id)
        recent_logs = self.log_service.list_logs(user_id, limit=settings.dashboard_recent_logs)
        return DashboardSummary(
            total_deployments=len(deployments),
            connected_deployments=sum(1 for d in deployments if d.status == "connected"),
            error_deployments=sum(1 for d in deployments if d.status == "error"),
            recent_log_count=len(recent_logs),
            recent_error_count=sum(1 for log in recent_logs if log.level == "error"),
            deployments=deployments,
            recent_logs=recent_logs,
        )
