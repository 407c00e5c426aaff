from __future__ import annotations

import logging
from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..config import APP_NAME, ORGANIZATION, ViewSettings
from ..graph.catalog import GraphCatalog
from ..graph.graph_view import GraphCanvas
from ..ui.particles import ParticleBackground
from .connections_panel import ConnectionsPanel, dot_icon

logger = logging.getLogger("knowledge_graph.graph_window")

HINT_TEXT = "Click a node to explore connections · Drag nodes to rearrange"


class GroupLegend(QtWidgets.QWidget):
    """Fila de grupos con su color."""

    def __init__(self, catalog: GraphCatalog, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        row = QtWidgets.QHBoxLayout(self)
        row.setContentsMargins(0, 8, 0, 0)
        row.setSpacing(12)
        row.addStretch(1)
        self._labels = []
        for group, color in catalog.group_colors.items():
            dot = QtWidgets.QLabel(self)
            dot.setPixmap(dot_icon(color, 10).pixmap(10, 10))
            text = QtWidgets.QLabel(group.capitalize(), self)
            text.setStyleSheet("color:#94a3b8;font-size:11px;")
            row.addWidget(dot)
            row.addWidget(text)
            self._labels.append(text)
        row.addStretch(1)

    def groups(self) -> list:
        return [lbl.text() for lbl in self._labels]


class GraphWindow(QtWidgets.QMainWindow):
    """Ventana principal: fondo de partículas, lienzo del grafo, leyenda y panel de conexiones."""

    def __init__(self, catalog: GraphCatalog, settings: Optional[ViewSettings] = None,
                 parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.view_settings = settings or ViewSettings()
        self.setWindowTitle("Knowledge Graph")
        self.resize(960, 720)

        # QSettings para persistir la geometría
        self._settings = QtCore.QSettings(ORGANIZATION, APP_NAME)

        interval = self.view_settings.frame_interval_ms
        self.background = ParticleBackground(self, interval_ms=interval,
                                             enabled=self.view_settings.show_particles)
        self.setCentralWidget(self.background)

        root = QtWidgets.QVBoxLayout(self.background)
        root.setContentsMargins(32, 24, 32, 16)
        root.setSpacing(0)

        self.canvas = GraphCanvas(catalog, parent=self.background, interval_ms=interval)
        self.panel = ConnectionsPanel(self.canvas, parent=self.canvas)
        self.legend = GroupLegend(catalog, self.background)

        hint = QtWidgets.QLabel(HINT_TEXT, self.background)
        hint.setAlignment(QtCore.Qt.AlignCenter)
        hint.setStyleSheet("color:#64748b;font-size:11px;padding-top:10px;")

        root.addStretch(1)
        root.addWidget(self.canvas)
        root.addWidget(self.legend)
        root.addWidget(hint)
        root.addStretch(1)

        self.background.watch(self.canvas)
        self.canvas.selectedNodeChanged.connect(self._on_selection_changed)

        self.statusBar().setStyleSheet("color:#64748b;background:#0b0f19;")
        self.statusBar().showMessage(f"{len(catalog.nodes)} nodes · {len(catalog.edges)} edges", 3000)
        self._restore_window_state()

    def _on_selection_changed(self, node_id) -> None:
        node = self.canvas.simulation.node(node_id)
        if node is not None:
            self.statusBar().showMessage(f"Selected: {node.label}", 2000)
        else:
            self.statusBar().clearMessage()

    def _restore_window_state(self) -> None:
        """Restaura la geometría si fue guardada."""
        try:
            ba = self._settings.value("window/geometry")
            if isinstance(ba, QtCore.QByteArray):
                self.restoreGeometry(ba)
        except Exception:
            logger.warning("Could not restore window geometry", exc_info=True)

    def _save_window_state(self) -> None:
        try:
            self._settings.setValue("window/geometry", self.saveGeometry())
        except Exception:
            logger.warning("Could not save window geometry", exc_info=True)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self.canvas.frame_loop.stop()
        self.background.frame_loop.stop()
        self._save_window_state()
        super().closeEvent(event)
