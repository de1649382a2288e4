"""
Core dependencies for route protection and ownership checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from studio.config import settings
from studio.database.supabase_client import get_supabase
from studio.modules.auth.service import AuthService
from studio.modules.deployments.remote_client import DeploymentApiClient
from supabase import Client
from typing import Any, Dict, Iterator
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    return auth_service.get_current_user(token)


def get_deployment_api_client() -> Iterator[DeploymentApiClient]:
    client = DeploymentApiClient(timeout=settings.remote_timeout_seconds)
    try:
        yield client
    finally:
        client.close()


def get_owned_deployment(deployment_id: str, user_id: str, supabase: Client) -> Dict[str, Any]:
    """Return the deployment row if it belongs to user_id.

    A deployment owned by someone else is reported exactly like a missing one.
    """
    try:
        result = supabase.table("deployments")\
            .select("*")\
            .eq("id", deployment_id)\
            .eq("user_id", user_id)\
            .maybe_single()\
            .execute()
    except Exception as e:
        logger.error(f"Error loading deployment {deployment_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e)
        )
    if result is None or not result.data:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Deployment not found"
        )
    return result.data
