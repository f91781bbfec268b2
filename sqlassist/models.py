from typing import Any, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

# A single column in a table
class Column(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: str = ""
    is_primary: bool = False

# A table, immutable for a given schema snapshot
class Table(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = ""
    columns: tuple[Column, ...] = ()

# The referenced side of a foreign key
class ForeignKeyRef(BaseModel):
    table: str = ""
    column: str = ""

# A directed foreign-key edge: table.column -> references.table.references.column
class Relationship(BaseModel):
    table: str = ""
    column: str = ""
    references: ForeignKeyRef = Field(default_factory=ForeignKeyRef)

# The full schema as shown in the browser
class SchemaInfo(BaseModel):
    db_name: str
    tables: list[Table] = []
    relationships: list[Relationship] = []


# A point in screen or world space
class Point(BaseModel):
    x: float = 0
    y: float = 0

# World-space position of one table node
class NodePosition(BaseModel):
    x: float = 0
    y: float = 0

# Canvas pan offset and zoom factor
class ViewTransform(BaseModel):
    pan_x: float = 0
    pan_y: float = 0
    zoom: float = 1.0

# One rendered line between two nodes, derived from positions
class Edge(BaseModel):
    x1: float
    y1: float
    x2: float
    y2: float
    relationship: Relationship


# Backend responses
class Profile(BaseModel):
    id: str = ""
    email: str = ""

class QueryHistory(BaseModel):
    id: str
    user_id: str = ""
    natural_query: str = ""
    sql_query: str = ""
    created_at: str = ""

    # Numeric ids and null timestamps arrive from the database as-is
    @field_validator("id", "user_id", "natural_query", "sql_query", "created_at", mode="before")
    @classmethod
    def as_text(cls, value: Any) -> str:
        return "" if value is None else str(value)

class InferResult(BaseModel):
    best_sql: Optional[str] = None
    best_exec_ok: Optional[bool] = False
    best_exec_error: Optional[str] = None
    best_rows_preview: Optional[list[Any]] = []
    transcript: Optional[str] = None


# A message in the query chat
class ChatMessage(BaseModel):
    id: int
    role: Literal["user", "assistant"]
    content: str
