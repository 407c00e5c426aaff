import os
import random
from typing import Generator

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from knowledge_graph.graph.catalog import GraphCatalog
from knowledge_graph.graph.model import GraphEdge, NodeSpec
from knowledge_graph.graph.simulation import ForceSimulation


@pytest.fixture(scope="session")
def qapp() -> Generator[QApplication, None, None]:
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def small_catalog() -> GraphCatalog:
    """A-B-C chain plus an isolated D."""
    return GraphCatalog(
        nodes=(
            NodeSpec("A", "Alpha", "frontend", 20),
            NodeSpec("B", "Beta", "backend", 20),
            NodeSpec("C", "Gamma", "tools", 20),
            NodeSpec("D", "Delta", "services", 20),
        ),
        edges=(GraphEdge("A", "B"), GraphEdge("B", "C")),
    )


@pytest.fixture
def trio_catalog() -> GraphCatalog:
    return GraphCatalog(
        nodes=(
            NodeSpec("sys", "System", "core", 28),
            NodeSpec("a", "A", "frontend", 20),
            NodeSpec("b", "B", "backend", 18),
        ),
        edges=(GraphEdge("sys", "a"), GraphEdge("sys", "b")),
    )


@pytest.fixture
def trio_sim(trio_catalog: GraphCatalog, rng: random.Random) -> ForceSimulation:
    sim = ForceSimulation(trio_catalog, rng=rng)
    sim.reset(400, 400)
    return sim


def place(sim: ForceSimulation, **positions) -> None:
    """Put nodes at fixed coordinates with zero velocity."""
    for node_id, (x, y) in positions.items():
        sim.move_node(node_id, x, y)
