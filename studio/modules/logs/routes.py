from fastapi import APIRouter, Depends, Query
from studio.database.supabase_client import get_supabase
from studio.modules.logs.schemas import LogCreate, LogResponse, LogClearResponse, LogLevel
from studio.modules.logs.service import LogService
from studio.core.dependencies import get_current_user
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/logs", tags=["logs"])


def get_log_service(supabase: Client = Depends(get_supabase)) -> LogService:
    return LogService(supabase)


@router.get("", response_model=List[LogResponse])
async def list_logs(
    deployment_id: Optional[str] = None,
    level: Optional[LogLevel] = None,
    limit: Optional[int] = Query(None, ge=1, le=1000),
    search: Optional[str] = None,
    user_data: Dict = Depends(get_current_user),
    service: LogService = Depends(get_log_service)
):
    """List logs with optional deployment, level and text filters"""
    return service.list_logs(
        user_id=user_data["id"],
        deployment_id=deployment_id,
        level=level,
        limit=limit,
        search=search
    )


@router.post("", response_model=LogResponse, status_code=201)
async def add_log(
    log_data: LogCreate,
    user_data: Dict = Depends(get_current_user),
    service: LogService = Depends(get_log_service)
):
    """Append a log entry"""
    return service.add_log(log_data, user_data["id"])


@router.delete("/deployment/{deployment_id}", response_model=LogClearResponse)
async def clear_logs(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: LogService = Depends(get_log_service)
):
    """Delete all of the caller's logs for a deployment"""
    deleted = service.clear_logs(deployment_id, user_data["id"])
    return LogClearResponse(deployment_id=deployment_id, deleted=deleted)
