import logging
from typing import Optional

from sqlassist.layout import NodeLayoutStore
from sqlassist.models import NodePosition, Point, ViewTransform
from sqlassist.transform import screen_to_world

logger = logging.getLogger(__name__)


class DragController:
    """Keeps one table node glued to the pointer while it is being dragged.

    Idle -> Dragging(table) -> Idle. The offset between the pointer and the
    node is captured in world space at drag start, so a move places the node
    at world(pointer) - offset and the node does not drift.
    """

    def __init__(self, store: NodeLayoutStore):
        self.store = store
        self.active: Optional[str] = None
        self._offset = Point()

    @property
    def dragging(self) -> bool:
        return self.active is not None

    def begin(self, name: str, pointer: Point, view: ViewTransform) -> bool:
        """Start dragging `name`. The node itself does not move yet."""
        position = self.store.get(name)
        if position is None:
            return False

        world = screen_to_world(pointer, view)
        self.active = name
        self._offset = Point(x=world.x - position.x, y=world.y - position.y)
        logger.debug("drag start on %s", name)
        return True

    def move(self, pointer: Point, view: ViewTransform) -> Optional[NodePosition]:
        if self.active is None:
            return None

        world = screen_to_world(pointer, view)
        return self.store.set(
            self.active,
            world.x - self._offset.x,
            world.y - self._offset.y,
        )

    def end(self) -> None:
        self.active = None
        self._offset = Point()
