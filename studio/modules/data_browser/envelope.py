"""
Parsing of paginated query responses from a remote deployment.

The remote answers ``{"status": ..., "value": {"page": [...],
"continueCursor": ..., "isDone": ...}}``; a bare ``{"page": ...}`` object is
accepted as well.
"""

import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class DocumentPage(BaseModel):
    documents: List[Dict[str, Any]] = []
    cursor: Optional[str] = None
    has_more: bool = False


def _is_document(candidate: Any) -> bool:
    return isinstance(candidate, dict) and isinstance(candidate.get("_id"), str)


def parse_documents_response(raw: str) -> DocumentPage:
    """Extract documents, continuation cursor and has_more from a response body.

    Malformed bodies give an empty, finished page. Entries without a string
    ``_id`` are dropped. ``has_more`` is true only when ``isDone`` is exactly
    ``false``.
    """
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        return DocumentPage()
    if not isinstance(parsed, dict):
        return DocumentPage()

    value = parsed.get("value")
    if not isinstance(value, dict):
        value = parsed

    page = value.get("page")
    if not isinstance(page, list):
        page = []
    cursor = value.get("continueCursor")

    return DocumentPage(
        documents=[doc for doc in page if _is_document(doc)],
        cursor=cursor if isinstance(cursor, str) else None,
        has_more=value.get("isDone") is False,
    )
