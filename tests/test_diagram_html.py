from sqlassist.diagram import RelationalModel
from sqlassist.diagram_html import render_relational_model, schema_to_interactive_html


def test_nodes_and_edges_rendered(shop_tables, shop_relationships):
    html = render_relational_model(shop_tables, shop_relationships, title="shop")

    assert html.count('class="node"') == 5
    assert html.count('class="edge"') == 3
    assert 'data-node="order_items" data-x="0" data-y="200"' in html
    # orders (320, 0) -> customers (0, 0)
    assert 'data-from="orders" data-to="customers" x1="580" y1="20" x2="0" y2="20"' in html
    assert '<span class="pk">PK</span>' in html
    assert '<div class="title">shop</div>' in html


def test_script_uses_same_rules():
    html = render_relational_model([], [])

    assert "const MIN_ZOOM = 0.3;" in html
    assert "const MAX_ZOOM = 3.0;" in html
    assert "const ZOOM_STEP = 0.1;" in html
    assert "const NODE_WIDTH = 260;" in html
    assert "document.addEventListener('mouseup', endGestures);" in html
    assert "container.addEventListener('mouseleave', endGestures);" in html


def test_current_state_is_rendered(shop_tables, shop_relationships):
    model = RelationalModel(shop_tables, shop_relationships)
    model.pointer_down(0, 0, node="customers")
    model.pointer_move(15.5, 30)
    model.pointer_up()
    model.wheel(-1)
    model.pointer_down(0, 0)
    model.pointer_move(25, -10)
    model.pointer_up()

    html = schema_to_interactive_html(model)

    assert 'data-node="customers" data-x="15.5" data-y="30"' in html
    assert 'style="left: 25px; top: -10px; transform: scale(1.1);"' in html
    assert ">110%<" in html
    assert 'class="title"' not in html


def test_names_are_escaped():
    html = render_relational_model(
        [{"name": '<script>alert("x")</script>', "columns": [{"name": "a&b", "type": "<int>"}]}],
        [],
    )

    assert "<script>alert" not in html
    assert "&lt;script&gt;" in html
    assert "a&amp;b" in html
    assert "(&lt;int&gt;)" in html


def test_zoom_buttons_live_in_the_page():
    html = render_relational_model([], [])

    assert 'onclick="zoomIn()"' in html
    assert 'onclick="zoomOut()"' in html
    assert "function zoomIn() {" in html
    assert "zoom = clampZoom(zoom + ZOOM_STEP);" in html
    assert "zoom = clampZoom(zoom - ZOOM_STEP);" in html
