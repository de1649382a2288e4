from pydantic import BaseModel
from typing import Optional, Dict, Any, List, Literal

PaneSide = Literal["left", "right"]


class PaneSelectRequest(BaseModel):
    deployment_id: Optional[str] = None
    table_name: Optional[str] = None


class PaneStateResponse(BaseModel):
    side: PaneSide
    deployment_id: Optional[str] = None
    table_name: Optional[str] = None
    documents: List[Dict[str, Any]] = []
    columns: List[str] = []
    rows: List[Dict[str, str]] = []
    is_loading: bool = False
    error: Optional[str] = None
    cursor: Optional[str] = None
    has_more: bool = False
    has_previous: bool = False
    page: int = 0


class DocumentJsonResponse(BaseModel):
    document_id: str
    json_text: str
