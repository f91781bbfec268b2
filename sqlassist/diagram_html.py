from html import escape
from typing import Any, Iterable, Optional

from sqlassist.diagram import Node, RelationalModel
from sqlassist.edges import ANCHOR_OFFSET_Y, NODE_WIDTH
from sqlassist.models import Edge
from sqlassist.viewport import MAX_ZOOM, MIN_ZOOM, ZOOM_STEP

# Dark theme, green foreign-key lines
COLORS = {
    "background": "#0a0a0a",
    "node": "#262626",
    "border": "#525252",
    "text": "#ffffff",
    "column": "#d4d4d4",
    "type": "#737373",
    "primary_key": "#facc15",
    "edge": "#4ade80",
}

# Large enough that dragged nodes keep their lines visible
SVG_SIZE = 5000


def _num(value: float) -> str:
    """Format a coordinate without a trailing .0"""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def generate_node_html(node: Node) -> str:
    """HTML card for a single table (draggable)"""
    name = escape(node.id, quote=True)

    html = f'''
        <div class="node" data-type="node" data-node="{name}" data-x="{_num(node.x)}" data-y="{_num(node.y)}"
             style="left: {_num(node.x)}px; top: {_num(node.y)}px; width: {NODE_WIDTH}px;">
            <div class="node-title" data-type="node">{name}</div>
    '''

    for col in node.table.columns:
        pk = '<span class="pk">PK</span>' if col.is_primary else ""
        html += f'''
            <div class="node-column" data-type="node">
                <span>{escape(col.name)}</span>
                <span class="col-type">({escape(col.type)})</span>{pk}
            </div>
        '''

    html += "</div>"
    return html


def generate_edge_svg(edge: Edge) -> str:
    """SVG line for a foreign-key relationship"""
    rel = edge.relationship
    return (
        f'<line class="edge" data-from="{escape(rel.table, quote=True)}" '
        f'data-to="{escape(rel.references.table, quote=True)}" '
        f'x1="{_num(edge.x1)}" y1="{_num(edge.y1)}" x2="{_num(edge.x2)}" y2="{_num(edge.y2)}" '
        f'stroke="{COLORS["edge"]}" stroke-width="2"/>'
    )


def schema_to_interactive_html(model: RelationalModel, title: str = "") -> str:
    """Render the diagram's current state as a standalone page with drag, pan and zoom"""
    view = model.view

    node_html = [generate_node_html(node) for node in model.nodes()]
    edge_svgs = [generate_edge_svg(edge) for edge in model.edges()]

    title_html = f'<div class="title">{escape(title)}</div>' if title else ""

    html = f'''
    <!DOCTYPE html>
    <html>
    <head>
        <meta charset="utf-8">
        <style>
            * {{
                margin: 0;
                padding: 0;
                box-sizing: border-box;
            }}

            body {{
                background: {COLORS["background"]};
                overflow: hidden;
                font-family: 'Inter', system-ui, sans-serif;
            }}

            .container {{
                width: 100%;
                height: 100vh;
                overflow: hidden;
                position: relative;
                user-select: none;
            }}

            #canvas {{
                position: absolute;
                transform-origin: top left;
                width: fit-content;
                height: fit-content;
            }}

            #edges {{
                position: absolute;
                top: 0;
                left: 0;
                pointer-events: none;
            }}

            .node {{
                position: absolute;
                background: {COLORS["node"]};
                color: {COLORS["text"]};
                border: 1px solid {COLORS["border"]};
                border-radius: 8px;
                padding: 12px;
                box-shadow: 0 4px 12px rgba(0, 0, 0, 0.4);
                cursor: grab;
                user-select: none;
            }}

            .node.dragging {{
                cursor: grabbing;
            }}

            .node-title {{
                font-weight: 700;
                margin-bottom: 4px;
            }}

            .node-column {{
                font-size: 12px;
                color: {COLORS["column"]};
                display: flex;
                gap: 4px;
            }}

            .col-type {{
                color: {COLORS["type"]};
            }}

            .pk {{
                color: {COLORS["primary_key"]};
                margin-left: 4px;
            }}

            .title, .zoom-level, .help-text {{
                position: fixed;
                background: #171717;
                border: 1px solid #262626;
                border-radius: 10px;
                padding: 8px 14px;
                z-index: 1000;
            }}

            .title {{
                top: 12px;
                left: 12px;
                color: {COLORS["text"]};
                font-size: 14px;
                font-weight: 700;
            }}

            .zoom-level {{
                bottom: 12px;
                left: 12px;
                color: {COLORS["edge"]};
                font-size: 12px;
                font-weight: 600;
            }}

            .help-text {{
                bottom: 12px;
                right: 12px;
                color: {COLORS["type"]};
                font-size: 11px;
            }}

            .controls {{
                position: fixed;
                top: 12px;
                right: 12px;
                display: flex;
                gap: 6px;
                z-index: 1000;
            }}

            .control-btn {{
                width: 32px;
                height: 32px;
                background: #171717;
                border: 1px solid #262626;
                border-radius: 8px;
                color: {COLORS["text"]};
                font-size: 16px;
                cursor: pointer;
            }}

            .control-btn:hover {{
                background: #262626;
            }}
        </style>
    </head>
    <body>
        {title_html}
        <div class="zoom-level" id="zoom-level">{round(view.zoom * 100)}%</div>
        <div class="help-text">Drag tables to rearrange • Scroll to zoom • Drag background to pan</div>
        <div class="controls">
            <button class="control-btn" onclick="zoomIn()" title="Zoom In">+</button>
            <button class="control-btn" onclick="zoomOut()" title="Zoom Out">−</button>
        </div>

        <div class="container" id="container">
            <div id="canvas" style="left: {_num(view.pan_x)}px; top: {_num(view.pan_y)}px; transform: scale({view.zoom});">
                <svg id="edges" width="{SVG_SIZE}" height="{SVG_SIZE}">
                    {"".join(edge_svgs)}
                </svg>
                {"".join(node_html)}
            </div>
        </div>

        <script>
            const MIN_ZOOM = {MIN_ZOOM};
            const MAX_ZOOM = {MAX_ZOOM};
            const ZOOM_STEP = {ZOOM_STEP};
            const NODE_WIDTH = {NODE_WIDTH};
            const ANCHOR_OFFSET_Y = {ANCHOR_OFFSET_Y};

            const container = document.getElementById('container');
            const canvas = document.getElementById('canvas');
            const zoomLevelDisplay = document.getElementById('zoom-level');

            let zoom = {view.zoom};
            let panX = {view.pan_x};
            let panY = {view.pan_y};

            // Canvas panning
            let panning = false;
            let panStart = {{ x: 0, y: 0 }};
            let mouseStart = {{ x: 0, y: 0 }};

            // Node dragging
            let dragging = null;
            let dragOffset = {{ x: 0, y: 0 }};

            // World positions by table name
            const positions = {{}};
            const nodeElements = {{}};
            document.querySelectorAll('.node').forEach(node => {{
                const name = node.dataset.node;
                positions[name] = {{
                    x: parseFloat(node.dataset.x),
                    y: parseFloat(node.dataset.y)
                }};
                nodeElements[name] = node;
            }});

            function clampZoom(value) {{
                const rounded = Math.round(value * 100) / 100;
                return Math.max(MIN_ZOOM, Math.min(MAX_ZOOM, rounded));
            }}

            function worldCoord(e) {{
                return {{
                    x: (e.clientX - panX) / zoom,
                    y: (e.clientY - panY) / zoom
                }};
            }}

            function applyTransform() {{
                canvas.style.left = panX + 'px';
                canvas.style.top = panY + 'px';
                canvas.style.transform = 'scale(' + zoom + ')';
                zoomLevelDisplay.textContent = Math.round(zoom * 100) + '%';
            }}

            function updateEdges() {{
                document.querySelectorAll('.edge').forEach(line => {{
                    const from = positions[line.dataset.from];
                    const to = positions[line.dataset.to];
                    if (!from || !to) return;

                    line.setAttribute('x1', from.x + NODE_WIDTH);
                    line.setAttribute('y1', from.y + ANCHOR_OFFSET_Y);
                    line.setAttribute('x2', to.x);
                    line.setAttribute('y2', to.y + ANCHOR_OFFSET_Y);
                }});
            }}

            function endGestures() {{
                if (dragging && nodeElements[dragging]) {{
                    nodeElements[dragging].classList.remove('dragging');
                }}
                dragging = null;
                panning = false;
            }}

            function zoomIn() {{
                zoom = clampZoom(zoom + ZOOM_STEP);
                applyTransform();
            }}

            function zoomOut() {{
                zoom = clampZoom(zoom - ZOOM_STEP);
                applyTransform();
            }}

            // Zoom anchored at the canvas origin
            container.addEventListener('wheel', (e) => {{
                e.preventDefault();
                zoom = clampZoom(zoom - Math.sign(e.deltaY) * ZOOM_STEP);
                applyTransform();
            }}, {{ passive: false }});

            document.querySelectorAll('.node').forEach(node => {{
                node.addEventListener('mousedown', (e) => {{
                    e.stopPropagation();
                    const name = node.dataset.node;
                    const world = worldCoord(e);
                    dragging = name;
                    dragOffset = {{
                        x: world.x - positions[name].x,
                        y: world.y - positions[name].y
                    }};
                    node.classList.add('dragging');
                }});
            }});

            container.addEventListener('mousedown', (e) => {{
                if (e.target.dataset && e.target.dataset.type === 'node') return;
                panning = true;
                panStart = {{ x: panX, y: panY }};
                mouseStart = {{ x: e.clientX, y: e.clientY }};
            }});

            document.addEventListener('mousemove', (e) => {{
                if (dragging) {{
                    const world = worldCoord(e);
                    const pos = {{
                        x: world.x - dragOffset.x,
                        y: world.y - dragOffset.y
                    }};
                    positions[dragging] = pos;
                    nodeElements[dragging].style.left = pos.x + 'px';
                    nodeElements[dragging].style.top = pos.y + 'px';
                    updateEdges();
                    return;
                }}

                if (!panning) return;

                panX = panStart.x + (e.clientX - mouseStart.x);
                panY = panStart.y + (e.clientY - mouseStart.y);
                applyTransform();
            }});

            // Release anywhere ends the gesture
            document.addEventListener('mouseup', endGestures);
            container.addEventListener('mouseleave', endGestures);
        </script>
    </body>
    </html>
    '''

    return html


def render_relational_model(tables: Iterable[Any], relationships: Iterable[Any], title: Optional[str] = None) -> str:
    """Interactive page for a freshly laid out schema"""
    return schema_to_interactive_html(RelationalModel(tables, relationships), title or "")
