"""Node positions for the relational model diagram.

Tables start on a fixed three column grid. After that the store accepts any
position for any table name; nothing is clamped to the canvas.
"""
from typing import Callable, Iterable, Iterator, Optional

from sqlassist.models import NodePosition, Table

GRID_COLUMNS = 3
COLUMN_WIDTH = 320
ROW_HEIGHT = 200

PositionListener = Callable[[str, NodePosition], None]


def grid_position(index: int) -> NodePosition:
    """Initial position for the table at `index`"""
    row = index // GRID_COLUMNS
    col = index % GRID_COLUMNS
    return NodePosition(x=col * COLUMN_WIDTH, y=row * ROW_HEIGHT)


class NodeLayoutStore:
    """Current world position of each table, keyed by table name."""

    def __init__(self, tables: Iterable[Table] = ()):
        self._positions: dict[str, NodePosition] = {}
        self._listeners: list[PositionListener] = []
        self.reset(tables)

    def reset(self, tables: Iterable[Table]) -> None:
        """Discard every position and lay the tables out on the grid again"""
        self._positions = {}
        for i, table in enumerate(tables):
            # Duplicate names share one node; the later grid slot wins
            self._positions[table.name] = grid_position(i)

    def get(self, name: str) -> Optional[NodePosition]:
        position = self._positions.get(name)
        if position is None:
            return None
        return position.model_copy()

    def set(self, name: str, x: float, y: float) -> NodePosition:
        position = NodePosition(x=x, y=y)
        self._positions[name] = position
        for listener in self._listeners:
            listener(name, position.model_copy())
        return position.model_copy()

    def positions(self) -> dict[str, NodePosition]:
        return {name: pos.model_copy() for name, pos in self._positions.items()}

    def subscribe(self, listener: PositionListener) -> None:
        """Call `listener(name, position)` after every write"""
        self._listeners.append(listener)

    def __contains__(self, name: object) -> bool:
        return name in self._positions

    def __iter__(self) -> Iterator[str]:
        return iter(self._positions)

    def __len__(self) -> int:
        return len(self._positions)
