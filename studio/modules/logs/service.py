from supabase import Client
from studio.config import settings
from studio.core.dependencies import get_owned_deployment
from studio.modules.logs.schemas import LogCreate, LogResponse
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def matches_search(log: LogResponse, search: str) -> bool:
    """Case-insensitive substring match on message or function name"""
    needle = search.lower()
    if needle in log.message.lower():
        return True
    return bool(log.function_name) and needle in log.function_name.lower()


class LogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_logs(
        self,
        user_id: str,
        deployment_id: Optional[str] = None,
        level: Optional[str] = None,
        limit: Optional[int] = None,
        search: Optional[str] = None
    ) -> List[LogResponse]:
        """List the caller's logs newest first, optionally filtered by deployment, level and text"""
        try:
            query = self.supabase.table("logs")\
                .select("*")\
                .eq("user_id", user_id)

            if deployment_id:
                query = query.eq("deployment_id", deployment_id)
            if level:
                query = query.eq("level", level)

            result = query.order("timestamp", desc=True)\
                .limit(limit or settings.log_list_limit)\
                .execute()

            logs = [LogResponse(**log) for log in result.data]
        except Exception as e:
            logger.error(f"Error listing logs: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

        if search:
            logs = [log for log in logs if matches_search(log, search)]
        return logs

    def add_log(self, log_data: LogCreate, user_id: str) -> LogResponse:
        """Append a log entry to a deployment owned by the caller"""
        get_owned_deployment(log_data.deployment_id, user_id, self.supabase)
        try:
            result = self.supabase.table("logs").insert({
                "deployment_id": log_data.deployment_id,
                "level": log_data.level,
                "message": log_data.message,
                "function_name": log_data.function_name,
                "request_id": log_data.request_id,
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "user_id": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create log entry")

            return LogResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating log entry: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def clear_logs(self, deployment_id: str, user_id: str) -> int:
        """Delete the caller's logs for one deployment; returns how many were removed"""
        try:
            result = self.supabase.table("logs")\
                .delete()\
                .eq("deployment_id", deployment_id)\
                .eq("user_id", user_id)\
                .execute()

            deleted = len(result.data or [])
            logger.info(f"Cleared {deleted} log entries for deployment {deployment_id}")
            return deleted
        except Exception as e:
            logger.error(f"Error clearing logs: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))
