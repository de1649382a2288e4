from supabase import Client
from studio.core.dependencies import get_owned_deployment
from studio.modules.schemas.schemas import (
    CachedSchemaResponse, SchemaDiff, SchemaDiffResponse, DiffSectionSummary
)
from studio.modules.schemas.parser import parse_schema, table_names
from studio.modules.schemas.diff import compute_diff, count_changes
from typing import List, Optional, Dict, Any
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _to_response(row: Dict[str, Any]) -> CachedSchemaResponse:
    return CachedSchemaResponse(
        id=row["id"],
        deployment_id=row["deployment_id"],
        schema_text=row["schema"],
        fetched_at=row["fetched_at"],
        user_id=row["user_id"],
    )


def summarize_diff(diff: SchemaDiff) -> SchemaDiffResponse:
    summary = {
        section: DiffSectionSummary(total=len(items), changes=count_changes(items))
        for section, items in (
            ("tables", diff.tables),
            ("indexes", diff.indexes),
            ("functions", diff.functions),
        )
    }
    return SchemaDiffResponse(diff=diff, summary=summary)


class SchemaService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _find_cached(self, deployment_id: str, user_id: str) -> Optional[Dict[str, Any]]:
        try:
            result = self.supabase.table("cached_schemas")\
                .select("*")\
                .eq("deployment_id", deployment_id)\
                .eq("user_id", user_id)\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error reading cached schema: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))
        if result is None or not result.data:
            return None
        return result.data

    def get_cached(self, deployment_id: str, user_id: str) -> CachedSchemaResponse:
        """Cached schema for a deployment owned by the caller"""
        row = self._find_cached(deployment_id, user_id)
        if row is None:
            raise HTTPException(status_code=404, detail="Cached schema not found")
        return _to_response(row)

    def get_table_names(self, deployment_id: str, user_id: str) -> List[str]:
        row = self._find_cached(deployment_id, user_id)
        if row is None:
            return []
        return table_names(row["schema"])

    def upsert_cached(self, deployment_id: str, schema_text: str, user_id: str) -> CachedSchemaResponse:
        """Insert the schema for a deployment, or patch the existing row"""
        get_owned_deployment(deployment_id, user_id, self.supabase)
        fetched_at = datetime.now(timezone.utc).isoformat()
        existing = self._find_cached(deployment_id, user_id)
        try:
            if existing:
                result = self.supabase.table("cached_schemas")\
                    .update({"schema": schema_text, "fetched_at": fetched_at})\
                    .eq("id", existing["id"])\
                    .execute()
            else:
                result = self.supabase.table("cached_schemas").insert({
                    "deployment_id": deployment_id,
                    "schema": schema_text,
                    "fetched_at": fetched_at,
                    "user_id": user_id,
                }).execute()

            if result.data and len(result.data) > 0:
                return _to_response(result.data[0])
            return self.get_cached(deployment_id, user_id)
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error saving cached schema: {str(e)}")
            raise HTTPException(status_code=500, detail=str(e))

    def diff_deployments(self, left_deployment_id: str, right_deployment_id: str, user_id: str) -> SchemaDiffResponse:
        """Diff the cached schemas of two deployments (left is the baseline)"""
        left = self.get_cached(left_deployment_id, user_id)
        right = self.get_cached(right_deployment_id, user_id)
        return self.diff_raw(left.schema_text, right.schema_text)

    def diff_raw(self, left_text: str, right_text: str) -> SchemaDiffResponse:
        return summarize_diff(compute_diff(parse_schema(left_text), parse_schema(right_text)))
