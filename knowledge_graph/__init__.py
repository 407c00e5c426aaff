"""
Fachada del paquete `knowledge_graph`.

Reexporta las clases más usadas para permitir imports cómodos, por ejemplo:

    from knowledge_graph import GraphCanvas, ForceSimulation, default_catalog

Los módulos Qt se importan aquí también; el núcleo de simulación
(`knowledge_graph.graph.simulation`, `interaction`, `render`, `catalog`)
no depende de Qt.
"""

# --- Graph (modelo, simulación e interacción) ---
from .graph.model import DragSession, GraphEdge, GraphNode, NodeSpec
from .graph.catalog import CatalogError, GraphCatalog, catalog_from_dict, default_catalog, load_catalog
from .graph.simulation import ForceParams, ForceSimulation
from .graph.interaction import InteractionController, SelectionInfo
from .graph.render import EdgeStyle, NodeStyle, build_frame
from .graph.frame_loop import FrameLoop
from .graph.graph_view import GraphCanvas

# --- UI y ventanas ---
from .ui.particles import ParticleBackground, ParticleField
from .app.connections_panel import ConnectionsPanel
from .app.graph_window import GraphWindow

__all__ = [
    # Graph
    "DragSession",
    "GraphEdge",
    "GraphNode",
    "NodeSpec",
    "CatalogError",
    "GraphCatalog",
    "catalog_from_dict",
    "default_catalog",
    "load_catalog",
    "ForceParams",
    "ForceSimulation",
    "InteractionController",
    "SelectionInfo",
    "EdgeStyle",
    "NodeStyle",
    "build_frame",
    "FrameLoop",
    "GraphCanvas",
    # UI
    "ParticleBackground",
    "ParticleField",
    "ConnectionsPanel",
    "GraphWindow",
]
