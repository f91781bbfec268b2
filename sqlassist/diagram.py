"""Interactive relational model: tables as draggable nodes on a pannable,
zoomable canvas, connected by foreign-key edges.

All state changes happen synchronously inside the pointer and wheel handlers,
one event at a time, so the position map needs no lock. A multi-threaded UI
toolkit would need a lock or a single owner thread for `layout`.
"""
import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel

from sqlassist.drag import DragController
from sqlassist.edges import compute_edges
from sqlassist.layout import NodeLayoutStore
from sqlassist.models import Edge, NodePosition, Point, Relationship, Table, ViewTransform
from sqlassist.schema import to_relationships, to_tables
from sqlassist.transform import world_to_screen
from sqlassist.viewport import PanZoomController

logger = logging.getLogger(__name__)


# A table together with its current world position
class Node(BaseModel):
    id: str
    table: Table
    x: float
    y: float


def _point(x: float, y: float) -> Point:
    return Point(x=x, y=y)


class RelationalModel:
    def __init__(self, tables: Iterable[Any] = (), relationships: Iterable[Any] = ()):
        self.layout = NodeLayoutStore()
        self.drag = DragController(self.layout)
        self.viewport = PanZoomController()
        self.tables: list[Table] = []
        self.relationships: list[Relationship] = []
        self.mount(tables, relationships)

    def mount(self, tables: Iterable[Any], relationships: Iterable[Any]) -> None:
        """Load a schema snapshot. Positions and view start over from scratch."""
        self.tables = to_tables(tables)
        self.relationships = to_relationships(relationships)
        self.drag.end()
        self.viewport.reset()
        self.layout.reset(self.tables)
        logger.debug(
            "mounted diagram with %d tables and %d relationships",
            len(self.tables), len(self.relationships),
        )

    @property
    def view(self) -> ViewTransform:
        return self.viewport.view

    # ---- events ----

    def pointer_down(self, x: float, y: float, node: Optional[str] = None) -> None:
        """Pointer pressed at screen (x, y). `node` is the table hit, if any."""
        if node is not None:
            # A node hit never starts a pan
            self.drag.begin(node, _point(x, y), self.view)
            return
        self.viewport.begin_pan(_point(x, y))

    def pointer_move(self, x: float, y: float) -> None:
        if self.drag.dragging:
            self.drag.move(_point(x, y), self.view)
        elif self.viewport.panning:
            self.viewport.move(_point(x, y))

    def pointer_up(self, x: Optional[float] = None, y: Optional[float] = None) -> None:
        """Release ends any gesture, wherever it happens"""
        self.drag.end()
        self.viewport.end()

    pointer_leave = pointer_up

    def wheel(self, delta_y: float) -> float:
        return self.viewport.wheel(delta_y)

    # ---- derived state ----

    def position(self, name: str) -> Optional[NodePosition]:
        return self.layout.get(name)

    def nodes(self) -> list[Node]:
        nodes = []
        seen = set()
        for table in self.tables:
            if table.name in seen:
                continue
            seen.add(table.name)
            pos = self.layout.get(table.name)
            nodes.append(Node(id=table.name, table=table, x=pos.x, y=pos.y))
        return nodes

    def edges(self) -> list[Edge]:
        return compute_edges(self.relationships, self.layout.positions())

    def screen_position(self, name: str) -> Optional[Point]:
        pos = self.layout.get(name)
        if pos is None:
            return None
        return world_to_screen(_point(pos.x, pos.y), self.view)
