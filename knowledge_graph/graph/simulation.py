"""knowledge_graph.graph.simulation

Force-directed layout for the knowledge graph.

`ForceSimulation` owns the only mutable copy of the node state. The canvas
calls `tick()` once per frame and reads `nodes` to paint; the interaction
controller moves the dragged node through `move_node()`. Everything runs on
the Qt main thread, so no locking is done here.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .catalog import GraphCatalog
from .model import GraphNode

logger = logging.getLogger("knowledge_graph.simulation")


@dataclass(frozen=True)
class ForceParams:
    gravity: float = 0.0005
    repulsion: float = 0.05
    repulsion_padding: float = 30.0
    spring: float = 0.003
    spring_length: float = 100.0
    damping: float = 0.9
    spawn_min: float = 100.0
    spawn_spread: float = 120.0


class ForceSimulation:
    """Gravity + pairwise repulsion + edge springs, integrated once per frame.

    Forces are not scaled by elapsed time: one tick is one frame, and the
    constants in `ForceParams` are tuned for roughly 60 frames per second.
    """

    def __init__(self, catalog: GraphCatalog, params: Optional[ForceParams] = None,
                 rng: Optional[random.Random] = None):
        self.catalog = catalog
        self.params = params or ForceParams()
        self._rng = rng or random.Random()
        self.width = 0.0
        self.height = 0.0
        self._nodes: List[GraphNode] = [
            GraphNode(id=s.id, label=s.label, group=s.group, radius=s.radius)
            for s in catalog.nodes
        ]
        self._by_id: Dict[str, GraphNode] = {n.id: n for n in self._nodes}

    @property
    def nodes(self) -> List[GraphNode]:
        return self._nodes

    def node(self, node_id: Optional[str]) -> Optional[GraphNode]:
        if node_id is None:
            return None
        return self._by_id.get(node_id)

    # ----------------------
    # Layout
    # ----------------------
    def reset(self, width: float, height: float) -> None:
        """Place every node afresh for a surface of the given size."""
        self.width = float(width)
        self.height = float(height)
        cx, cy = self.width / 2, self.height / 2
        count = len(self._nodes)
        for i, n in enumerate(self._nodes):
            angle = (i / count) * math.pi * 2
            if n.group == self.catalog.core_group:
                dist = 0.0
            else:
                dist = self.params.spawn_min + self._rng.random() * self.params.spawn_spread
            n.x = cx + math.cos(angle) * dist
            n.y = cy + math.sin(angle) * dist
            n.vx = 0.0
            n.vy = 0.0
        logger.debug("Layout reset to %.0fx%.0f (%d nodes)", self.width, self.height, count)

    def tick(self, dragged_id: Optional[str] = None) -> None:
        p = self.params
        nodes = self._nodes
        cx, cy = self.width / 2, self.height / 2

        # Gravedad hacia el centro
        for n in nodes:
            if n.id == dragged_id:
                continue
            n.vx += (cx - n.x) * p.gravity
            n.vy += (cy - n.y) * p.gravity

        # Repulsión por pares (el nodo arrastrado no recibe impulso)
        for i in range(len(nodes)):
            a = nodes[i]
            for j in range(i + 1, len(nodes)):
                b = nodes[j]
                dx = a.x - b.x
                dy = a.y - b.y
                dist = math.sqrt(dx * dx + dy * dy) or 1.0
                min_dist = a.radius + b.radius + p.repulsion_padding
                if dist >= min_dist:
                    continue
                force = (min_dist - dist) / dist * p.repulsion
                if a.id != dragged_id:
                    a.vx += dx * force
                    a.vy += dy * force
                if b.id != dragged_id:
                    b.vx -= dx * force
                    b.vy -= dy * force

        # Muelles de las aristas
        for e in self.catalog.edges:
            a = self._by_id.get(e.source)
            b = self._by_id.get(e.target)
            if a is None or b is None:
                continue
            dx = b.x - a.x
            dy = b.y - a.y
            dist = math.sqrt(dx * dx + dy * dy) or 1.0
            force = (dist - p.spring_length) / dist * p.spring
            if a.id != dragged_id:
                a.vx += dx * force
                a.vy += dy * force
            if b.id != dragged_id:
                b.vx -= dx * force
                b.vy -= dy * force

        # Amortiguación, integración y recorte a los bordes
        for n in nodes:
            if n.id == dragged_id:
                continue
            n.vx *= p.damping
            n.vy *= p.damping
            n.x += n.vx
            n.y += n.vy
            n.x = max(n.radius, min(self.width - n.radius, n.x))
            n.y = max(n.radius, min(self.height - n.radius, n.y))

    # ----------------------
    # Pointer helpers
    # ----------------------
    def node_at(self, x: float, y: float) -> Optional[GraphNode]:
        """Topmost node whose circle contains (x, y); later nodes win."""
        for n in reversed(self._nodes):
            if n.contains(x, y):
                return n
        return None

    def move_node(self, node_id: str, x: float, y: float) -> None:
        n = self._by_id.get(node_id)
        if n is None:
            return
        n.x = x
        n.y = y
        n.vx = 0.0
        n.vy = 0.0
