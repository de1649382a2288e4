from supabase import Client
from studio.config import settings
from studio.core.dependencies import get_owned_deployment
from studio.modules.deployments.remote_client import DeploymentApiClient
from studio.modules.deployments.schemas import (
    DeploymentCreate, DeploymentResponse, ActionResponse, DocumentQueryResponse
)
from studio.modules.schemas.service import SchemaService
from typing import List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class DeploymentService:
    def __init__(self, supabase: Client, api_client: Optional[DeploymentApiClient] = None):
        self.supabase = supabase
        self.api_client = api_client

    def _remote(self) -> DeploymentApiClient:
        if self.api_client is None:
            raise HTTPException(status_code=500, detail="Remote deployment client not configured")
        return self.api_client

    def list_deployments(self, user_id: str) -> List[DeploymentResponse]:
        """List the caller's deployments, newest first"""
        try:
            result = self.supabase.table("deployments")\
                .select("*")\
                .eq("user_id", user_id)\
                .order("created_at", desc=True)\
                .execute()

            return [DeploymentResponse(**deployment) for deployment in result.data]
        except Exception as e:
            logger.error(f"Error listing deployments: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def get_deployment(self, deployment_id: str, user_id: str) -> DeploymentResponse:
        """Get a deployment owned by the caller"""
        return DeploymentResponse(**get_owned_deployment(deployment_id, user_id, self.supabase))

    def create_deployment(self, deployment_data: DeploymentCreate, user_id: str) -> DeploymentResponse:
        """Register a deployment. New deployments start as pending until checked."""
        try:
            result = self.supabase.table("deployments").insert({
                "name": deployment_data.name,
                "url": deployment_data.url,
                "deploy_key": deployment_data.deploy_key,
                "environment": deployment_data.environment,
                "status": "pending",
                "user_id": user_id,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create deployment")

            logger.info(f"Registered deployment {result.data[0]['id']} ({deployment_data.environment})")
            return DeploymentResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating deployment: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def delete_deployment(self, deployment_id: str, user_id: str) -> bool:
        """Delete a deployment owned by the caller"""
        get_owned_deployment(deployment_id, user_id, self.supabase)
        try:
            result = self.supabase.table("deployments")\
                .delete()\
                .eq("id", deployment_id)\
                .eq("user_id", user_id)\
                .execute()

            return len(result.data) > 0
        except Exception as e:
            logger.error(f"Error deleting deployment: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def update_status(
        self,
        deployment_id: str,
        user_id: str,
        status: str,
        error_message: Optional[str] = None
    ) -> DeploymentResponse:
        """Set status, error message and last_checked on a deployment owned by the caller"""
        get_owned_deployment(deployment_id, user_id, self.supabase)
        try:
            result = self.supabase.table("deployments")\
                .update({
                    "status": status,
                    "error_message": error_message,
                    "last_checked": _now(),
                })\
                .eq("id", deployment_id)\
                .eq("user_id", user_id)\
                .execute()

            if result.data and len(result.data) > 0:
                return DeploymentResponse(**result.data[0])
            # Empty response can happen (e.g. PostgREST return=minimal); re-read the row
            return self.get_deployment(deployment_id, user_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating deployment status: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def check_connection(self, deployment_id: str, user_id: str) -> ActionResponse:
        """Ping the deployment and record connected/error"""
        deployment = get_owned_deployment(deployment_id, user_id, self.supabase)
        result = self._remote().check_connection(deployment["url"], deployment["deploy_key"])

        if result.success:
            self.update_status(deployment_id, user_id, "connected")
        else:
            self.update_status(deployment_id, user_id, "error", result.error)
        logger.info(f"Connection check for deployment {deployment_id}: {'ok' if result.success else result.error}")
        return ActionResponse(success=result.success, error=result.error)

    def fetch_schema(self, deployment_id: str, user_id: str) -> ActionResponse:
        """Pull the remote schema and cache it. Failures leave cache and status untouched."""
        deployment = get_owned_deployment(deployment_id, user_id, self.supabase)
        result = self._remote().fetch_schema(deployment["url"], deployment["deploy_key"])

        if not result.success:
            return ActionResponse(success=False, error=result.error)

        SchemaService(self.supabase).upsert_cached(deployment_id, result.body or "", user_id)
        self.update_status(deployment_id, user_id, "connected")
        return ActionResponse(success=True)

    def query_documents(
        self,
        deployment_id: str,
        user_id: str,
        table_name: str,
        cursor: Optional[str] = None,
        limit: Optional[int] = None
    ) -> DocumentQueryResponse:
        """Fetch one raw page of documents from a remote table"""
        deployment = get_owned_deployment(deployment_id, user_id, self.supabase)
        result = self._remote().query_documents(
            deployment["url"],
            deployment["deploy_key"],
            table_name,
            cursor=cursor,
            page_size=limit or settings.default_page_size,
        )
        if result.success:
            return DocumentQueryResponse(success=True, documents=result.body)
        return DocumentQueryResponse(success=False, error=result.error)
