"""knowledge_graph.graph.interaction

Pointer handling for the graph canvas: click-to-select, drag-to-move and
hover preview. Coordinates are in the canvas' local (logical pixel) space.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Set

from .model import DragSession, GraphNode
from .simulation import ForceSimulation

CURSOR_POINTER = "pointer"
CURSOR_DEFAULT = "default"


@dataclass(frozen=True)
class SelectionInfo:
    node: GraphNode
    connections: List[GraphNode]

    @property
    def connection_count(self) -> int:
        return len(self.connections)


class InteractionController:
    def __init__(self, simulation: ForceSimulation):
        self.simulation = simulation
        self.selected: Optional[str] = None
        self.hovered: Optional[str] = None
        self.drag: Optional[DragSession] = None
        self.cursor = CURSOR_DEFAULT
        self.on_selection_changed: Callable[[Optional[str]], None] | None = None
        self.on_hover_changed: Callable[[Optional[str]], None] | None = None

    @property
    def dragged_id(self) -> Optional[str]:
        return self.drag.node_id if self.drag else None

    @property
    def active_id(self) -> Optional[str]:
        return self.selected or self.hovered

    def highlight_set(self) -> Optional[Set[str]]:
        active = self.active_id
        if active is None:
            return None
        return self.simulation.catalog.connected(active)

    # ----------------------
    # Estado
    # ----------------------
    def select(self, node_id: Optional[str]) -> None:
        if node_id == self.selected:
            return
        self.selected = node_id
        if self.on_selection_changed:
            self.on_selection_changed(node_id)

    def _set_hovered(self, node_id: Optional[str]) -> None:
        if node_id == self.hovered:
            return
        self.hovered = node_id
        if self.on_hover_changed:
            self.on_hover_changed(node_id)

    # ----------------------
    # Pointer events
    # ----------------------
    def pointer_down(self, x: float, y: float) -> Optional[str]:
        node = self.simulation.node_at(x, y)
        if node is None:
            self.select(None)
            return None
        self.drag = DragSession(node.id, x - node.x, y - node.y)
        self.select(None if node.id == self.selected else node.id)
        return node.id

    def pointer_move(self, x: float, y: float) -> None:
        if self.drag is not None:
            self.simulation.move_node(
                self.drag.node_id, x - self.drag.offset_x, y - self.drag.offset_y
            )
            return
        node = self.simulation.node_at(x, y)
        self._set_hovered(node.id if node else None)
        self.cursor = CURSOR_POINTER if node else CURSOR_DEFAULT

    def pointer_up(self) -> None:
        """End the drag, if any. Also used when the pointer leaves the canvas."""
        self.drag = None

    # ----------------------
    # Side panel
    # ----------------------
    def selection_info(self) -> Optional[SelectionInfo]:
        node = self.simulation.node(self.selected)
        if node is None:
            return None
        connections = []
        for node_id in self.simulation.catalog.neighbours(node.id):
            other = self.simulation.node(node_id)
            if other is not None:
                connections.append(other)
        return SelectionInfo(node=node, connections=connections)
