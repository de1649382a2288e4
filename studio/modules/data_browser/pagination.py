"""
Forward-only cursor pagination for one data browser pane.

The remote protocol only hands out forward cursors, so a pane supports
``next`` and restarting from page 0 (``prev`` and ``refresh`` both restart).
There is no random access to earlier pages.

A pane never holds its lock across the remote call. Every load remembers the
selection version it was issued under; if the user picks another deployment
or table before the response arrives, the late response is dropped.
"""

import json
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from pydantic import BaseModel

from studio.modules.data_browser.envelope import parse_documents_response
from studio.modules.deployments.schemas import DocumentQueryResponse

logger = logging.getLogger(__name__)

# (deployment_id, table_name, cursor) -> raw page result
PageFetcher = Callable[[str, str, Optional[str]], DocumentQueryResponse]

FETCH_FAILED = "Failed to fetch documents"

# Numbers in this range are rendered as millisecond epoch timestamps
_TIMESTAMP_MS_RANGE = (1_000_000_000_000, 2_000_000_000_000)


class PaneState(BaseModel):
    deployment_id: Optional[str] = None
    table_name: Optional[str] = None
    documents: List[Dict[str, Any]] = []
    is_loading: bool = False
    error: Optional[str] = None
    cursor: Optional[str] = None
    has_more: bool = False
    page: int = 0


def collect_columns(documents: List[Dict[str, Any]]) -> List[str]:
    """Union of document keys in first-seen order."""
    columns: Dict[str, None] = {}
    for doc in documents:
        for key in doc:
            columns.setdefault(key, None)
    return list(columns)


def format_value(value: Any) -> str:
    """Render one cell of a dynamically-shaped document as text."""
    if value is None:
        return "null"
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        low, high = _TIMESTAMP_MS_RANGE
        if low < value < high:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc).isoformat()
        if isinstance(value, float) and value.is_integer():
            return str(int(value))
        return str(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def document_json(document: Dict[str, Any]) -> str:
    """Copy-to-clipboard form of a document."""
    return json.dumps(document, indent=2, ensure_ascii=False)


def _error_message(exc: Exception) -> str:
    detail = getattr(exc, "detail", None)
    if isinstance(detail, str) and detail:
        return detail
    return str(exc) or FETCH_FAILED


class BrowserPane:
    """State machine for one pane: select, next, restart."""

    def __init__(self):
        self._lock = threading.Lock()
        self._state = PaneState()
        self._version = 0

    def snapshot(self) -> PaneState:
        with self._lock:
            return self._state.model_copy(deep=True)

    def reset(self) -> PaneState:
        """Back to empty/idle with no selection."""
        with self._lock:
            self._version += 1
            self._state = PaneState()
            return self._state.model_copy(deep=True)

    def select(self, deployment_id: Optional[str], table_name: Optional[str], fetch_page: PageFetcher) -> PaneState:
        """Switch deployment/table. State is cleared before the first page is requested."""
        with self._lock:
            self._version += 1
            self._state = PaneState(deployment_id=deployment_id, table_name=table_name)
        if deployment_id and table_name:
            return self.load(fetch_page, None, 0)
        return self.snapshot()

    def next(self, fetch_page: PageFetcher) -> PaneState:
        """Load the following page. No-op without a cursor or when the remote said it is done."""
        with self._lock:
            state = self._state
            if state.is_loading or not state.has_more or not state.cursor:
                return state.model_copy(deep=True)
            cursor, page = state.cursor, state.page + 1
        return self.load(fetch_page, cursor, page)

    def prev(self, fetch_page: PageFetcher) -> PaneState:
        """Restart from page 0; there is no backward cursor."""
        with self._lock:
            if self._state.is_loading or self._state.page <= 0:
                return self._state.model_copy(deep=True)
        return self.load(fetch_page, None, 0)

    def refresh(self, fetch_page: PageFetcher) -> PaneState:
        with self._lock:
            if self._state.is_loading:
                return self._state.model_copy(deep=True)
        return self.load(fetch_page, None, 0)

    def load(self, fetch_page: PageFetcher, cursor: Optional[str], page: int) -> PaneState:
        """Request one page for the current selection.

        On failure the error is recorded and the previous documents stay visible.
        """
        with self._lock:
            deployment_id, table_name = self._state.deployment_id, self._state.table_name
            if not deployment_id or not table_name:
                return self._state.model_copy(deep=True)
            version = self._version
            self._state.is_loading = True
            self._state.error = None

        outcome = self._fetch(fetch_page, deployment_id, table_name, cursor)

        with self._lock:
            if version != self._version:
                logger.debug(f"Dropping stale page for {deployment_id}/{table_name}")
                return self._state.model_copy(deep=True)
            documents_page, error = outcome
            if documents_page is not None:
                self._state = PaneState(
                    deployment_id=deployment_id,
                    table_name=table_name,
                    documents=documents_page.documents,
                    cursor=documents_page.cursor,
                    has_more=documents_page.has_more,
                    page=page,
                )
            else:
                self._state.is_loading = False
                self._state.error = error
            return self._state.model_copy(deep=True)

    @staticmethod
    def _fetch(fetch_page: PageFetcher, deployment_id: str, table_name: str, cursor: Optional[str]) -> Tuple:
        try:
            result = fetch_page(deployment_id, table_name, cursor)
        except Exception as e:
            logger.warning(f"Page fetch for {deployment_id}/{table_name} failed: {e}")
            return None, _error_message(e)
        if result.success and result.documents is not None:
            return parse_documents_response(result.documents), None
        return None, result.error or FETCH_FAILED
