import pytest

from sqlassist.models import Relationship
from sqlassist.schema import normalize_schema, to_column, to_relationship


def test_tables_keyed_by_name_keep_order():
    payload = {
        "db_name": "shop",
        "schema": {
            "tables": {
                "users": {"columns": [{"name": "id", "type": "integer", "is_primary": True}]},
                "orders": {"columns": [{"name": "user_id", "type": "integer"}]},
            },
            "relationships": [
                {"table": "orders", "column": "user_id", "references": {"table": "users", "column": "id"}},
            ],
        },
    }

    schema = normalize_schema(payload, "42")

    assert schema.db_name == "shop"
    assert [t.name for t in schema.tables] == ["users", "orders"]
    assert schema.tables[0].columns[0].is_primary is True
    assert schema.tables[1].columns[0].is_primary is False
    assert schema.relationships[0].references.table == "users"


def test_missing_pieces_fall_back():
    schema = normalize_schema({"schema": {"tables": {"t": {}}}}, "7")

    assert schema.db_name == "Connection 7"
    assert schema.tables[0].name == "t"
    assert schema.tables[0].columns == ()
    assert schema.relationships == []


def test_garbage_payload():
    schema = normalize_schema("not json", "1")

    assert schema.tables == []
    assert schema.relationships == []


def test_list_of_tables_is_accepted():
    schema = normalize_schema({"schema": {"tables": [{"name": "a", "columns": [{"name": "x"}]}]}}, "1")

    assert schema.tables[0].name == "a"
    assert schema.tables[0].columns[0].type == ""


def test_partial_relationship():
    rel = to_relationship({"table": "orders", "column": None})

    assert rel == Relationship(table="orders")
    assert rel.references.table == ""


def test_db_name_is_text():
    assert normalize_schema({"db_name": 5, "schema": {}}, "1").db_name == "5"
    assert normalize_schema({"db_name": "", "schema": {}}, "1").db_name == "Connection 1"


@pytest.mark.parametrize("flag, expected", [
    (True, True),
    ("true", True),
    (" TRUE ", True),
    (1, True),
    (False, False),
    ("false", False),
    ("0", False),
    ("no", False),
    (None, False),
    (0, False),
])
def test_primary_key_flag(flag, expected):
    assert to_column({"name": "id", "is_primary": flag}).is_primary is expected
