import json

from studio.modules.schemas.diff import FIELDS_CHANGED, compute_diff, count_changes
from studio.modules.schemas.parser import parse_schema
from studio.modules.schemas.schemas import DiffItem, NormalizedSchema, SchemaTable


def _items(diff_items):
    return [(i.name, i.status, i.details) for i in diff_items]


def test_worked_example():
    left = NormalizedSchema(
        tables=[SchemaTable(name="users", fields={"name": "string"}, indexes=["by_email"])],
        functions=["users:get"],
    )
    right = NormalizedSchema(
        tables=[SchemaTable(name="users", fields={"name": "string", "age": "number"}, indexes=["by_email", "by_age"])],
        functions=["users:get", "users:list"],
    )
    diff = compute_diff(left, right)
    assert _items(diff.tables) == [("users", "changed", FIELDS_CHANGED)]
    assert FIELDS_CHANGED == "Fields changed"
    assert sorted(_items(diff.indexes)) == [
        ("users.by_age", "added", None),
        ("users.by_email", "unchanged", None),
    ]
    assert sorted(_items(diff.functions)) == [
        ("users:get", "unchanged", None),
        ("users:list", "added", None),
    ]


def test_identical_schemas_are_all_unchanged():
    schema = NormalizedSchema(
        tables=[
            SchemaTable(name="users", fields={"name": "string"}, indexes=["by_name", "by_created"]),
            SchemaTable(name="posts", fields={"title": "string"}, indexes=[]),
        ],
        functions=["users:get", "posts:list", "posts:create"],
    )
    diff = compute_diff(schema, schema)
    assert {i.status for i in diff.tables + diff.indexes + diff.functions} == {"unchanged"}
    assert len(diff.tables) == 2
    assert len(diff.indexes) == 2
    assert len(diff.functions) == 3
    assert count_changes(diff.tables) == 0


def test_added_and_removed_tables_cascade_indexes():
    left = NormalizedSchema(tables=[SchemaTable(name="old", indexes=["by_x"])])
    right = NormalizedSchema(tables=[SchemaTable(name="new", indexes=["by_y", "by_z"])])
    diff = compute_diff(left, right)
    assert _items(diff.tables) == [("new", "added", None), ("old", "removed", None)]
    assert _items(diff.indexes) == [
        ("new.by_y", "added", None),
        ("new.by_z", "added", None),
        ("old.by_x", "removed", None),
    ]


def test_output_order_follows_passes():
    left = NormalizedSchema(tables=[SchemaTable(name="shared"), SchemaTable(name="gone")])
    right = NormalizedSchema(tables=[SchemaTable(name="fresh"), SchemaTable(name="shared")])
    diff = compute_diff(left, right)
    assert [i.name for i in diff.tables] == ["fresh", "gone", "shared"]


def test_index_removed_from_shared_table():
    left = NormalizedSchema(tables=[SchemaTable(name="t", indexes=["a", "b"])])
    right = NormalizedSchema(tables=[SchemaTable(name="t", indexes=["a"])])
    diff = compute_diff(left, right)
    assert _items(diff.tables) == [("t", "unchanged", None)]
    assert _items(diff.indexes) == [("t.a", "unchanged", None), ("t.b", "removed", None)]


def test_field_reordering_reports_changed():
    left = NormalizedSchema(tables=[SchemaTable(name="t", fields={"a": "string", "b": "number"})])
    right = NormalizedSchema(tables=[SchemaTable(name="t", fields={"b": "number", "a": "string"})])
    assert _items(compute_diff(left, right).tables) == [("t", "changed", FIELDS_CHANGED)]


def test_functions_have_no_changed_state():
    left = NormalizedSchema(functions=["a", "b"])
    right = NormalizedSchema(functions=["b", "c"])
    diff = compute_diff(left, right)
    assert _items(diff.functions) == [
        ("b", "unchanged", None),
        ("c", "added", None),
        ("a", "removed", None),
    ]


def test_table_status_matches_presence():
    left = parse_schema(json.dumps({"tables": [{"name": n} for n in ["a", "b", "c", "d"]]}))
    right = parse_schema(json.dumps({"tables": [{"name": n} for n in ["c", "d", "e"]]}))
    diff = compute_diff(left, right)
    left_names = {t.name for t in left.tables}
    right_names = {t.name for t in right.tables}
    seen = [i.name for i in diff.tables]
    assert sorted(seen) == sorted(left_names | right_names)
    for item in diff.tables:
        if item.status == "added":
            assert item.name in right_names and item.name not in left_names
        elif item.status == "removed":
            assert item.name in left_names and item.name not in right_names
        else:
            assert item.name in left_names and item.name in right_names


def test_empty_schemas_diff_to_nothing():
    diff = compute_diff(NormalizedSchema(), NormalizedSchema())
    assert diff.tables == [] and diff.indexes == [] and diff.functions == []


def test_count_changes():
    items = [
        DiffItem(name="a", status="added"),
        DiffItem(name="b", status="unchanged"),
        DiffItem(name="c", status="changed", details=FIELDS_CHANGED),
    ]
    assert count_changes(items) == 2
