from studio.modules.data_browser import pane_registry
from studio.modules.data_browser.pagination import (
    PageFetcher, PaneState, collect_columns, format_value, document_json
)
from studio.modules.data_browser.schemas import PaneStateResponse, DocumentJsonResponse
from studio.modules.deployments.service import DeploymentService
from typing import Optional
from fastapi import HTTPException


def to_response(side: str, state: PaneState) -> PaneStateResponse:
    columns = collect_columns(state.documents)
    rows = [
        {column: format_value(doc.get(column)) for column in columns}
        for doc in state.documents
    ]
    return PaneStateResponse(
        side=side,
        deployment_id=state.deployment_id,
        table_name=state.table_name,
        documents=state.documents,
        columns=columns,
        rows=rows,
        is_loading=state.is_loading,
        error=state.error,
        cursor=state.cursor,
        has_more=state.has_more,
        has_previous=state.page > 0,
        page=state.page,
    )


class BrowserService:
    """Per-user data browser panes backed by remote page queries."""

    def __init__(self, deployment_service: DeploymentService, user_id: str, page_size: Optional[int] = None):
        self.deployment_service = deployment_service
        self.user_id = user_id
        self.page_size = page_size

    def _fetcher(self) -> PageFetcher:
        def fetch_page(deployment_id: str, table_name: str, cursor: Optional[str]):
            return self.deployment_service.query_documents(
                deployment_id, self.user_id, table_name, cursor=cursor, limit=self.page_size
            )
        return fetch_page

    def get_state(self, side: str) -> PaneStateResponse:
        return to_response(side, pane_registry.get_pane(self.user_id, side).snapshot())

    def select(self, side: str, deployment_id: Optional[str], table_name: Optional[str]) -> PaneStateResponse:
        pane = pane_registry.get_pane(self.user_id, side)
        return to_response(side, pane.select(deployment_id, table_name, self._fetcher()))

    def next_page(self, side: str) -> PaneStateResponse:
        return to_response(side, pane_registry.get_pane(self.user_id, side).next(self._fetcher()))

    def prev_page(self, side: str) -> PaneStateResponse:
        return to_response(side, pane_registry.get_pane(self.user_id, side).prev(self._fetcher()))

    def refresh(self, side: str) -> PaneStateResponse:
        return to_response(side, pane_registry.get_pane(self.user_id, side).refresh(self._fetcher()))

    def reset(self, side: str) -> PaneStateResponse:
        return to_response(side, pane_registry.get_pane(self.user_id, side).reset())

    def document_json(self, side: str, document_id: str) -> DocumentJsonResponse:
        """Pretty JSON for one document on the pane's current page"""
        state = pane_registry.get_pane(self.user_id, side).snapshot()
        for doc in state.documents:
            if doc.get("_id") == document_id:
                return DocumentJsonResponse(document_id=document_id, json_text=document_json(doc))
        raise HTTPException(status_code=404, detail="Document not found on current page")
