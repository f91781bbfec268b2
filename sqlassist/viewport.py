from sqlassist.models import Point, ViewTransform

MIN_ZOOM = 0.3
MAX_ZOOM = 3.0
ZOOM_STEP = 0.1


def clamp_zoom(value: float) -> float:
    # Rounded so repeated steps land exactly on the bounds
    return max(MIN_ZOOM, min(MAX_ZOOM, round(value, 2)))


class PanZoomController:
    """Canvas pan offset and zoom, independent of node positions.

    Zoom is anchored at the canvas origin (top-left); the pan offset is not
    corrected to keep the point under the cursor fixed.
    """

    def __init__(self):
        self.view = ViewTransform()
        self.panning = False
        self._pan_start = Point()
        self._pointer_start = Point()

    def reset(self) -> None:
        self.view = ViewTransform()
        self.end()

    def wheel(self, delta_y: float) -> float:
        """Scroll down zooms out, scroll up zooms in, one step per event"""
        direction = (delta_y > 0) - (delta_y < 0)
        self.view.zoom = clamp_zoom(self.view.zoom - direction * ZOOM_STEP)
        return self.view.zoom

    def begin_pan(self, pointer: Point) -> None:
        self.panning = True
        self._pan_start = Point(x=self.view.pan_x, y=self.view.pan_y)
        self._pointer_start = pointer.model_copy()

    def move(self, pointer: Point) -> bool:
        if not self.panning:
            return False

        # Raw screen delta; zoom does not scale the pan
        self.view.pan_x = self._pan_start.x + (pointer.x - self._pointer_start.x)
        self.view.pan_y = self._pan_start.y + (pointer.y - self._pointer_start.y)
        return True

    def end(self) -> None:
        self.panning = False
