from pydantic import BaseModel
from typing import List
from studio.modules.deployments.schemas import DeploymentResponse
from studio.modules.logs.schemas import LogResponse


class DashboardSummary(BaseModel):
    total_deployments: int
    connected_deployments: int
    error_deployments: int
    recent_log_count: int
    recent_error_count: int
    deployments: List[DeploymentResponse]
    recent_logs: List[LogResponse]
