from fastapi import APIRouter, Depends
from studio.database.supabase_client import get_supabase
from studio.modules.deployments.remote_client import DeploymentApiClient
from studio.modules.deployments.schemas import (
    DeploymentCreate, DeploymentResponse, DeploymentStatusUpdate,
    DocumentQueryRequest, DocumentQueryResponse, ActionResponse
)
from studio.modules.deployments.service import DeploymentService
from studio.core.dependencies import get_current_user, get_deployment_api_client
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/deployments", tags=["deployments"])


def get_deployment_service(
    supabase: Client = Depends(get_supabase),
    api_client: DeploymentApiClient = Depends(get_deployment_api_client)
) -> DeploymentService:
    return DeploymentService(supabase, api_client)


@router.get("", response_model=List[DeploymentResponse])
async def list_deployments(
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """List the caller's deployments"""
    return service.list_deployments(user_data["id"])


@router.post("", response_model=DeploymentResponse, status_code=201)
async def add_deployment(
    deployment_data: DeploymentCreate,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Register a deployment (status starts as pending)"""
    return service.create_deployment(deployment_data, user_data["id"])


@router.get("/{deployment_id}", response_model=DeploymentResponse)
async def get_deployment(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Get deployment by ID (404 unless owned by the caller)"""
    return service.get_deployment(deployment_id, user_data["id"])


@router.delete("/{deployment_id}", status_code=204)
async def remove_deployment(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Delete a deployment"""
    service.delete_deployment(deployment_id, user_data["id"])
    return None


@router.patch("/{deployment_id}/status", response_model=DeploymentResponse)
async def update_deployment_status(
    deployment_id: str,
    status_data: DeploymentStatusUpdate,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Set deployment status explicitly"""
    return service.update_status(
        deployment_id, user_data["id"], status_data.status, status_data.error_message
    )


@router.post("/{deployment_id}/check", response_model=ActionResponse)
def check_connection(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """
    Check that the deployment answers.
    Any HTTP status below 500 counts as connected; the result is stored on the deployment.
    """
    return service.check_connection(deployment_id, user_data["id"])


@router.post("/{deployment_id}/schema/fetch", response_model=ActionResponse)
def fetch_schema(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Fetch the remote schema and cache it for diffing"""
    return service.fetch_schema(deployment_id, user_data["id"])


@router.post("/{deployment_id}/documents", response_model=DocumentQueryResponse)
def query_documents(
    deployment_id: str,
    query: DocumentQueryRequest,
    user_data: Dict = Depends(get_current_user),
    service: DeploymentService = Depends(get_deployment_service)
):
    """Fetch one raw page of a remote table (envelope text is returned unparsed)"""
    return service.query_documents(
        deployment_id, user_data["id"], query.table_name, query.cursor, query.limit
    )
