from typing import Iterable, Mapping, Optional

from sqlassist.models import Edge, NodePosition, Relationship

# Rendered node width and the vertical offset of the anchor points
NODE_WIDTH = 260
ANCHOR_OFFSET_Y = 20


def edge_for(rel: Relationship, positions: Mapping[str, NodePosition]) -> Optional[Edge]:
    """Line from the source node's right side to the referenced node's left side"""
    # A blank name never resolves, even if some table came in without one
    if not rel.table or not rel.references.table:
        return None

    source = positions.get(rel.table)
    target = positions.get(rel.references.table)

    if source is None or target is None:
        return None

    return Edge(
        x1=source.x + NODE_WIDTH,
        y1=source.y + ANCHOR_OFFSET_Y,
        x2=target.x,
        y2=target.y + ANCHOR_OFFSET_Y,
        relationship=rel,
    )


def compute_edges(relationships: Iterable[Relationship], positions: Mapping[str, NodePosition]) -> list[Edge]:
    """Every drawable edge; relationships with unknown tables are skipped"""
    edges = []
    for rel in relationships:
        edge = edge_for(rel, positions)
        if edge is not None:
            edges.append(edge)
    return edges
