from sqlassist.layout import COLUMN_WIDTH, ROW_HEIGHT, NodeLayoutStore, grid_position
from sqlassist.models import NodePosition, Table


def test_grid_position_three_columns():
    assert grid_position(0) == NodePosition(x=0, y=0)
    assert grid_position(2) == NodePosition(x=2 * COLUMN_WIDTH, y=0)
    assert grid_position(3) == NodePosition(x=0, y=ROW_HEIGHT)
    assert grid_position(7) == NodePosition(x=320, y=400)


def test_five_tables_second_row(table_models):
    store = NodeLayoutStore(table_models)

    assert len(store) == 5
    assert store.get("order_items") == NodePosition(x=0, y=200)
    assert store.get("reviews") == NodePosition(x=320, y=200)
    assert list(store) == ["customers", "orders", "products", "order_items", "reviews"]


def test_get_unknown_table():
    store = NodeLayoutStore([Table(name="a")])
    assert store.get("missing") is None
    assert "missing" not in store


def test_set_is_unclamped_and_idempotent():
    store = NodeLayoutStore([Table(name="a")])

    store.set("a", -5000, 12345.5)
    store.set("a", -5000, 12345.5)

    assert store.get("a") == NodePosition(x=-5000, y=12345.5)


def test_returned_positions_are_copies():
    store = NodeLayoutStore([Table(name="a")])

    pos = store.get("a")
    pos.x = 999

    assert store.get("a").x == 0
    snapshot = store.positions()
    snapshot["a"].y = 999
    assert store.get("a").y == 0


def test_listeners_see_every_write():
    store = NodeLayoutStore([Table(name="a"), Table(name="b")])
    seen = []
    store.subscribe(lambda name, pos: seen.append((name, pos.x, pos.y)))

    store.set("b", 10, 20)

    assert seen == [("b", 10, 20)]


def test_reset_discards_moved_positions():
    store = NodeLayoutStore([Table(name="a"), Table(name="b")])
    store.set("a", 400, 400)

    store.reset([Table(name="b"), Table(name="c")])

    assert store.get("a") is None
    assert store.get("b") == NodePosition(x=0, y=0)
    assert store.get("c") == NodePosition(x=320, y=0)
