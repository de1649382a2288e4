"""
Schema parsing for the diff view.

Accepts the manual-input format::

    {"tables": [{"name": str, "indexes": [str], "fields": {name: type}}],
     "functions": [str]}

Parsing never raises. Invalid JSON or any shape mismatch yields the empty
schema, so a half-typed schema simply has nothing to diff.
"""

import json
from typing import Any, List, Optional
import logging

from studio.modules.schemas.schemas import NormalizedSchema, SchemaTable

logger = logging.getLogger(__name__)

# Top-level keys that are not table names in the remote /api/schema output
_NON_TABLE_KEYS = ("functions", "schemaValidation")


def _parse_table(entry: Any) -> Optional[SchemaTable]:
    if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
        return None

    fields = entry.get("fields")
    if fields is None:
        fields = {}
    if not isinstance(fields, dict) or not all(isinstance(v, str) for v in fields.values()):
        return None

    indexes = entry.get("indexes")
    if indexes is None:
        indexes = []
    if not isinstance(indexes, list) or not all(isinstance(i, str) for i in indexes):
        return None

    return SchemaTable(name=entry["name"], fields=fields, indexes=indexes)


def parse_schema(raw: str) -> NormalizedSchema:
    """Parse raw schema text into a NormalizedSchema (empty on any failure)."""
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        return NormalizedSchema()

    if not isinstance(data, dict):
        return NormalizedSchema()

    raw_tables = data.get("tables")
    if raw_tables is None:
        raw_tables = []
    raw_functions = data.get("functions")
    if raw_functions is None:
        raw_functions = []
    if not isinstance(raw_tables, list) or not isinstance(raw_functions, list):
        return NormalizedSchema()
    if not all(isinstance(f, str) for f in raw_functions):
        return NormalizedSchema()

    tables: List[SchemaTable] = []
    seen = set()
    for entry in raw_tables:
        table = _parse_table(entry)
        if table is None:
            logger.debug("Discarding schema: malformed table entry")
            return NormalizedSchema()
        # first occurrence wins
        if table.name in seen:
            continue
        seen.add(table.name)
        tables.append(table)

    return NormalizedSchema(tables=tables, functions=list(raw_functions))


def serialize_schema(schema: NormalizedSchema) -> str:
    """Render a schema in the manual-input format."""
    return json.dumps({
        "tables": [
            {"name": t.name, "indexes": list(t.indexes), "fields": dict(t.fields)}
            for t in schema.tables
        ],
        "functions": list(schema.functions),
    })


def table_names(raw: str) -> List[str]:
    """Table names from cached schema text.

    Uses the ``tables`` list when present, otherwise treats top-level keys
    (minus functions/schemaValidation) as table names.
    """
    try:
        data = json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        return []
    if not isinstance(data, dict):
        return []

    tables = data.get("tables")
    if isinstance(tables, list):
        return [
            t["name"] for t in tables
            if isinstance(t, dict) and isinstance(t.get("name"), str)
        ]
    return [k for k in data.keys() if k not in _NON_TABLE_KEYS]
