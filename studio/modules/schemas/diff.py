"""
Schema diff between two snapshots.

``left`` is the baseline and ``right`` the candidate: a table only on the
right is "added", only on the left is "removed". Items are emitted in pass
order (right-only tables, left-only tables, then tables present on both
sides in left order); callers render them as-is.
"""

import json
from typing import Iterable, List

from studio.modules.schemas.schemas import DiffItem, NormalizedSchema, SchemaDiff

FIELDS_CHANGED = "Fields changed"


def _index_name(table_name: str, index_name: str) -> str:
    return f"{table_name}.{index_name}"


def _fields_signature(fields: dict) -> str:
    # Serialized comparison: key order matters, so a pure reordering reads as a change.
    return json.dumps(fields)


def compute_diff(left: NormalizedSchema, right: NormalizedSchema) -> SchemaDiff:
    left_tables = {t.name: t for t in reversed(left.tables)}
    right_tables = {t.name: t for t in reversed(right.tables)}

    tables: List[DiffItem] = []
    indexes: List[DiffItem] = []

    for table in right.tables:
        if table.name not in left_tables:
            tables.append(DiffItem(name=table.name, status="added"))
            for idx in table.indexes:
                indexes.append(DiffItem(name=_index_name(table.name, idx), status="added"))

    for table in left.tables:
        if table.name not in right_tables:
            tables.append(DiffItem(name=table.name, status="removed"))
            for idx in table.indexes:
                indexes.append(DiffItem(name=_index_name(table.name, idx), status="removed"))

    for left_table in left.tables:
        right_table = right_tables.get(left_table.name)
        if right_table is None:
            continue

        if _fields_signature(left_table.fields) != _fields_signature(right_table.fields):
            tables.append(DiffItem(name=left_table.name, status="changed", details=FIELDS_CHANGED))
        else:
            tables.append(DiffItem(name=left_table.name, status="unchanged"))

        left_indexes = set(left_table.indexes)
        right_indexes = set(right_table.indexes)
        for idx in right_table.indexes:
            status = "unchanged" if idx in left_indexes else "added"
            indexes.append(DiffItem(name=_index_name(left_table.name, idx), status=status))
        for idx in left_table.indexes:
            if idx not in right_indexes:
                indexes.append(DiffItem(name=_index_name(left_table.name, idx), status="removed"))

    left_functions = set(left.functions)
    right_functions = set(right.functions)
    functions: List[DiffItem] = []
    for fn in right.functions:
        functions.append(DiffItem(name=fn, status="unchanged" if fn in left_functions else "added"))
    for fn in left.functions:
        if fn not in right_functions:
            functions.append(DiffItem(name=fn, status="removed"))

    return SchemaDiff(tables=tables, indexes=indexes, functions=functions)


def count_changes(items: Iterable[DiffItem]) -> int:
    """Number of items that are not unchanged."""
    return sum(1 for item in items if item.status != "unchanged")
