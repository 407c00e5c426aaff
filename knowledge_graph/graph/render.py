"""knowledge_graph.graph.render

Per-frame style resolution, kept free of Qt so the highlight rules can be
checked without a display. `graph_view` turns the resulting draw list into
QPainter calls.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Set

from .catalog import GraphCatalog
from .model import GraphNode

DIMMED_NODE_OPACITY = 0.15


class EdgeStyle(Enum):
    DEFAULT = "default"
    HIGHLIGHTED = "highlighted"
    DIMMED = "dimmed"


class NodeStyle(Enum):
    NORMAL = "normal"
    ACTIVE = "active"
    CONNECTED = "connected"
    DIMMED = "dimmed"


@dataclass(frozen=True)
class EdgeDraw:
    source: GraphNode
    target: GraphNode
    style: EdgeStyle


@dataclass(frozen=True)
class NodeDraw:
    node: GraphNode
    style: NodeStyle
    color: str
    opacity: float
    font_size: int
    bold: bool


@dataclass(frozen=True)
class Frame:
    active_id: Optional[str]
    highlight: Optional[Set[str]]
    edges: List[EdgeDraw]
    nodes: List[NodeDraw]


def label_font_size(radius: float) -> int:
    return 11 if radius > 20 else 9


def edge_style(source: str, target: str, highlight: Optional[Set[str]]) -> EdgeStyle:
    if highlight is None:
        return EdgeStyle.DEFAULT
    if source in highlight and target in highlight:
        return EdgeStyle.HIGHLIGHTED
    return EdgeStyle.DIMMED


def node_style(node_id: str, active_id: Optional[str], highlight: Optional[Set[str]]) -> NodeStyle:
    if node_id == active_id:
        return NodeStyle.ACTIVE
    if highlight is None:
        return NodeStyle.NORMAL
    return NodeStyle.CONNECTED if node_id in highlight else NodeStyle.DIMMED


def build_frame(catalog: GraphCatalog, nodes: Iterable[GraphNode], active_id: Optional[str]) -> Frame:
    """Resolve the draw list for one frame: edges first, then nodes, in catalog order."""
    nodes = list(nodes)
    by_id = {n.id: n for n in nodes}
    highlight = catalog.connected(active_id) if active_id else None

    edges: List[EdgeDraw] = []
    for e in catalog.edges:
        a = by_id.get(e.source)
        b = by_id.get(e.target)
        if a is None or b is None:
            continue
        edges.append(EdgeDraw(a, b, edge_style(e.source, e.target, highlight)))

    draws: List[NodeDraw] = []
    for n in nodes:
        style = node_style(n.id, active_id, highlight)
        draws.append(NodeDraw(
            node=n,
            style=style,
            color=catalog.color_for(n.group),
            opacity=DIMMED_NODE_OPACITY if style is NodeStyle.DIMMED else 1.0,
            font_size=label_font_size(n.radius),
            bold=style is NodeStyle.ACTIVE,
        ))
    return Frame(active_id=active_id, highlight=highlight, edges=edges, nodes=draws)
