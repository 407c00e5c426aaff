"""knowledge_graph.graph.model

Node, edge and drag-session types for the knowledge graph.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class NodeSpec:
    """Catalog entry: identity and appearance, without simulation state."""

    id: str
    label: str
    group: str
    radius: float


@dataclass
class GraphNode:
    id: str
    label: str
    group: str
    radius: float
    # Estado de simulación (mutable en cada tick y durante el arrastre)
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0

    def contains(self, x: float, y: float) -> bool:
        dx = x - self.x
        dy = y - self.y
        return dx * dx + dy * dy <= self.radius * self.radius


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str

    def other(self, node_id: str) -> Optional[str]:
        if self.source == node_id:
            return self.target
        if self.target == node_id:
            return self.source
        return None


@dataclass(frozen=True)
class DragSession:
    node_id: str
    offset_x: float
    offset_y: float
