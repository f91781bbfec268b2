import re
from typing import Any, Iterable

from sqlassist.schema import to_relationships, to_tables

# Words that conflict with Mermaid syntax
RESERVED_WORDS = ["class", "entity", "relationship", "erdiagram", "end"]


def safe_name(name: str) -> str:
    """Make table names safe for Mermaid"""
    name = re.sub(r"\W", "_", name) or "_"
    if name.lower() in RESERVED_WORDS:
        return f"{name}Table"
    return name


def display_type(column_type: str) -> str:
    """Clean up a declared SQL type for display"""
    cleaned = re.sub(r"[(),\s]", "", column_type)
    return cleaned or "unknown"


def schema_to_mermaid(tables: Iterable[Any], relationships: Iterable[Any]) -> str:
    """Convert a schema to Mermaid ERD syntax"""
    tables = to_tables(tables)
    relationships = to_relationships(relationships)

    if not tables:
        return "No schema to display."

    names = {t.name for t in tables}
    foreign_keys = {(r.table, r.column) for r in relationships}

    lines = ["erDiagram"]

    # Add tables with their columns
    for table in tables:
        lines.append(f"    {safe_name(table.name)} {{")
        for col in table.columns:
            markers = []
            if col.is_primary:
                markers.append("PK")
            if (table.name, col.name) in foreign_keys:
                markers.append("FK")
            line = f"        {display_type(col.type)} {safe_name(col.name)}"
            if markers:
                line += " " + ", ".join(markers)
            lines.append(line)
        lines.append("    }")

    lines.append("")

    # One referenced table row has many referencing rows
    for rel in relationships:
        if rel.table not in names or rel.references.table not in names:
            continue
        label = rel.column.replace('"', "'") or "fk"
        lines.append(
            f'    {safe_name(rel.references.table)} ||--o{{ {safe_name(rel.table)} : "{label}"'
        )

    return "\n".join(lines)
