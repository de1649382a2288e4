from fastapi import APIRouter, Depends
from studio.database.supabase_client import get_supabase
from studio.modules.schemas.schemas import (
    CachedSchemaResponse, CachedSchemaUpsert, DeploymentDiffRequest, RawDiffRequest, SchemaDiffResponse
)
from studio.modules.schemas.service import SchemaService
from studio.core.dependencies import get_current_user
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/schemas", tags=["schemas"])


def get_schema_service(supabase: Client = Depends(get_supabase)) -> SchemaService:
    return SchemaService(supabase)


@router.post("/diff", response_model=SchemaDiffResponse)
async def diff_deployments(
    diff_request: DeploymentDiffRequest,
    user_data: Dict = Depends(get_current_user),
    service: SchemaService = Depends(get_schema_service)
):
    """Compare the cached schemas of two deployments"""
    return service.diff_deployments(
        diff_request.left_deployment_id, diff_request.right_deployment_id, user_data["id"]
    )


@router.post("/diff/raw", response_model=SchemaDiffResponse)
async def diff_raw(
    diff_request: RawDiffRequest,
    user_data: Dict = Depends(get_current_user),
    service: SchemaService = Depends(get_schema_service)
):
    """Compare two schema texts without touching the cache"""
    return service.diff_raw(diff_request.left_schema, diff_request.right_schema)


@router.get("/{deployment_id}", response_model=CachedSchemaResponse)
async def get_cached_schema(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: SchemaService = Depends(get_schema_service)
):
    """Get the cached schema for a deployment"""
    return service.get_cached(deployment_id, user_data["id"])


@router.put("/{deployment_id}", response_model=CachedSchemaResponse)
async def upsert_cached_schema(
    deployment_id: str,
    schema_data: CachedSchemaUpsert,
    user_data: Dict = Depends(get_current_user),
    service: SchemaService = Depends(get_schema_service)
):
    """Store a manually entered schema for a deployment"""
    return service.upsert_cached(deployment_id, schema_data.schema_text, user_data["id"])


@router.get("/{deployment_id}/tables", response_model=List[str])
async def get_table_names(
    deployment_id: str,
    user_data: Dict = Depends(get_current_user),
    service: SchemaService = Depends(get_schema_service)
):
    """Table names from the cached schema (empty when nothing is cached)"""
    return service.get_table_names(deployment_id, user_data["id"])
