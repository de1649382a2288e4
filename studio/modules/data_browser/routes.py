from fastapi import APIRouter, Depends
from studio.config import settings
from studio.modules.data_browser.schemas import (
    PaneSide, PaneSelectRequest, PaneStateResponse, DocumentJsonResponse
)
from studio.modules.data_browser.service import BrowserService
from studio.modules.deployments.routes import get_deployment_service
from studio.modules.deployments.service import DeploymentService
from studio.core.dependencies import get_current_user
from typing import Dict

router = APIRouter(prefix="/browser", tags=["data-browser"])


def get_browser_service(
    user_data: Dict = Depends(get_current_user),
    deployment_service: DeploymentService = Depends(get_deployment_service)
) -> BrowserService:
    return BrowserService(deployment_service, user_data["id"], settings.default_page_size)


@router.get("/panes/{side}", response_model=PaneStateResponse)
async def get_pane(side: PaneSide, service: BrowserService = Depends(get_browser_service)):
    """Current state of a pane"""
    return service.get_state(side)


@router.post("/panes/{side}/select", response_model=PaneStateResponse)
def select_table(
    side: PaneSide,
    selection: PaneSelectRequest,
    service: BrowserService = Depends(get_browser_service)
):
    """Pick deployment and table for a pane; clears it and loads the first page"""
    return service.select(side, selection.deployment_id, selection.table_name)


@router.post("/panes/{side}/next", response_model=PaneStateResponse)
def next_page(side: PaneSide, service: BrowserService = Depends(get_browser_service)):
    """Load the next page (no-op when the remote has no more data)"""
    return service.next_page(side)


@router.post("/panes/{side}/prev", response_model=PaneStateResponse)
def prev_page(side: PaneSide, service: BrowserService = Depends(get_browser_service)):
    """Go back to page 0; cursors only move forward"""
    return service.prev_page(side)


@router.post("/panes/{side}/refresh", response_model=PaneStateResponse)
def refresh(side: PaneSide, service: BrowserService = Depends(get_browser_service)):
    """Reload from page 0 with the current selection"""
    return service.refresh(side)


@router.delete("/panes/{side}", response_model=PaneStateResponse)
async def reset_pane(side: PaneSide, service: BrowserService = Depends(get_browser_service)):
    """Clear selection and documents"""
    return service.reset(side)


@router.get("/panes/{side}/documents/{document_id}/json", response_model=DocumentJsonResponse)
async def copy_document_json(
    side: PaneSide,
    document_id: str,
    service: BrowserService = Depends(get_browser_service)
):
    """Document as indented JSON, for copying to the clipboard"""
    return service.document_json(side, document_id)
