from pydantic import BaseModel
from typing import Optional, Dict, List, Literal
from datetime import datetime

DiffStatus = Literal["added", "removed", "changed", "unchanged"]


class SchemaTable(BaseModel):
    name: str
    fields: Dict[str, str] = {}
    indexes: List[str] = []


class NormalizedSchema(BaseModel):
    tables: List[SchemaTable] = []
    functions: List[str] = []


class DiffItem(BaseModel):
    name: str
    status: DiffStatus
    details: Optional[str] = None


class SchemaDiff(BaseModel):
    tables: List[DiffItem] = []
    indexes: List[DiffItem] = []
    functions: List[DiffItem] = []


class CachedSchemaUpsert(BaseModel):
    schema_text: str


class CachedSchemaResponse(BaseModel):
    id: str
    deployment_id: str
    schema_text: str
    fetched_at: datetime
    user_id: str


class DeploymentDiffRequest(BaseModel):
    left_deployment_id: str
    right_deployment_id: str


class RawDiffRequest(BaseModel):
    left_schema: str
    right_schema: str


class DiffSectionSummary(BaseModel):
    total: int
    changes: int


class SchemaDiffResponse(BaseModel):
    diff: SchemaDiff
    summary: Dict[str, DiffSectionSummary]
