from sqlassist.models import Point, ViewTransform


def screen_to_world(point: Point, view: ViewTransform) -> Point:
    """Map a pointer position to diagram coordinates under the current pan/zoom"""
    return Point(
        x=(point.x - view.pan_x) / view.zoom,
        y=(point.y - view.pan_y) / view.zoom,
    )


def world_to_screen(point: Point, view: ViewTransform) -> Point:
    """Inverse of screen_to_world"""
    return Point(
        x=point.x * view.zoom + view.pan_x,
        y=point.y * view.zoom + view.pan_y,
    )
