"""Turn backend schema payloads into tables and relationships for the UI.

`GET /schema/{id}` answers with tables keyed by name:

    {"db_name": "...", "schema": {"tables": {"users": {"columns": [...]}},
                                  "relationships": [...]}}

Nothing here raises on missing or malformed fields. Missing values become
empty strings, so a relationship that cannot be resolved simply draws no edge.
"""
import logging
from typing import Any, Iterable, Optional

from sqlassist.models import Column, ForeignKeyRef, Relationship, SchemaInfo, Table

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _flag(value: Any) -> bool:
    """Only true, 1 or the string "true" marks a primary key"""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return value is True or value == 1


def to_column(raw: Any) -> Column:
    if isinstance(raw, Column):
        return raw
    if not isinstance(raw, dict):
        return Column()
    return Column(
        name=_text(raw.get("name")),
        type=_text(raw.get("type")),
        is_primary=_flag(raw.get("is_primary")),
    )


def to_table(raw: Any, name: Optional[str] = None) -> Table:
    """Build a Table from a dict; `name` overrides the dict's own name"""
    if isinstance(raw, Table):
        return raw
    if not isinstance(raw, dict):
        raw = {}
    columns = raw.get("columns") or []
    if not isinstance(columns, list):
        columns = []
    return Table(
        name=_text(name if name is not None else raw.get("name")),
        columns=tuple(to_column(c) for c in columns),
    )


def to_relationship(raw: Any) -> Relationship:
    if isinstance(raw, Relationship):
        return raw
    if not isinstance(raw, dict):
        return Relationship()
    references = raw.get("references")
    if not isinstance(references, dict):
        references = {}
    return Relationship(
        table=_text(raw.get("table")),
        column=_text(raw.get("column")),
        references=ForeignKeyRef(
            table=_text(references.get("table")),
            column=_text(references.get("column")),
        ),
    )


def to_tables(raw: Iterable[Any]) -> list[Table]:
    return [to_table(t) for t in raw or []]


def to_relationships(raw: Iterable[Any]) -> list[Relationship]:
    return [to_relationship(r) for r in raw or []]


def normalize_schema(payload: Any, connection_id: str) -> SchemaInfo:
    """Convert a /schema/{id} response into the ordered SchemaInfo the pages use"""
    logger.debug("raw schema response for %s: %r", connection_id, payload)

    if not isinstance(payload, dict):
        payload = {}
    schema = payload.get("schema")
    if not isinstance(schema, dict):
        schema = {}

    raw_tables = schema.get("tables") or {}
    if isinstance(raw_tables, dict):
        tables = [to_table(info, name=name) for name, info in raw_tables.items()]
    elif isinstance(raw_tables, list):
        tables = to_tables(raw_tables)
    else:
        tables = []

    raw_rels = schema.get("relationships") or []
    relationships = to_relationships(raw_rels if isinstance(raw_rels, list) else [])

    return SchemaInfo(
        db_name=_text(payload.get("db_name")) or f"Connection {connection_id}",
        tables=tables,
        relationships=relationships,
    )
