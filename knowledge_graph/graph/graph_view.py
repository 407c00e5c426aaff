from __future__ import annotations

import logging
import random
from typing import Optional

from PySide6.QtCore import QPointF, QRectF, QSize, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QRadialGradient
from PySide6.QtWidgets import QSizePolicy, QWidget

from .catalog import GraphCatalog
from .frame_loop import FrameLoop
from .interaction import CURSOR_POINTER, InteractionController
from .render import EdgeStyle, Frame, NodeStyle, build_frame
from .simulation import ForceParams, ForceSimulation

logger = logging.getLogger("knowledge_graph.graph_view")

GLOW_WIDTH = 8.0
MIN_HEIGHT = 450
MAX_HEIGHT = 600


def _rgba(r: int, g: int, b: int, a: float) -> QColor:
    return QColor(r, g, b, int(round(a * 255)))


class GraphCanvas(QWidget):
    """
    Lienzo del grafo de conocimiento:
    - Simulación de fuerzas continua (un tick por frame)
    - Click para seleccionar, arrastre para mover, hover para previsualizar
    - Resalta las conexiones del nodo activo
    """

    selectedNodeChanged = Signal(object)
    hoveredNodeChanged = Signal(object)

    # Paleta (fondo oscuro)
    EDGE_DEFAULT = _rgba(100, 116, 139, 0.2)
    EDGE_DIMMED = _rgba(100, 116, 139, 0.08)
    EDGE_HIGHLIGHT = _rgba(96, 165, 250, 0.6)
    BORDER_ACTIVE = _rgba(255, 255, 255, 0.8)
    BORDER_CONNECTED = _rgba(255, 255, 255, 0.4)
    BORDER_NORMAL = _rgba(255, 255, 255, 0.15)
    LABEL = _rgba(255, 255, 255, 0.95)
    LABEL_DIMMED = _rgba(255, 255, 255, 0.3)
    SURFACE = QColor(15, 23, 42, 128)
    SURFACE_BORDER = QColor(30, 41, 59, 180)

    def __init__(self, catalog: GraphCatalog, parent: Optional[QWidget] = None,
                 interval_ms: int = 16, params: Optional[ForceParams] = None,
                 rng: Optional[random.Random] = None) -> None:
        super().__init__(parent)
        self.catalog = catalog
        self.simulation = ForceSimulation(catalog, params=params, rng=rng)
        self.controller = InteractionController(self.simulation)
        self.controller.on_selection_changed = self._emit_selection
        self.controller.on_hover_changed = self._emit_hover
        self._loop = FrameLoop(self._on_frame, interval_ms, parent=self)
        self._surface_size = QSize()

        self.setMouseTracking(True)
        self.setMinimumHeight(MIN_HEIGHT)
        policy = QSizePolicy(QSizePolicy.Expanding, QSizePolicy.Preferred)
        policy.setHeightForWidth(True)
        self.setSizePolicy(policy)

    # ----------------------
    # Geometría
    # ----------------------
    def sizeHint(self) -> QSize:
        return QSize(700, 500)

    def hasHeightForWidth(self) -> bool:
        return True

    def heightForWidth(self, width: int) -> int:
        return int(max(MIN_HEIGHT, min(width * 0.7, MAX_HEIGHT)))

    @property
    def frame_loop(self) -> FrameLoop:
        return self._loop

    def reset_layout(self, width: float, height: float) -> None:
        """New random layout for the given surface size; restarts the frame loop."""
        was_running = self._loop.running
        self._loop.stop()
        self.simulation.reset(width, height)
        self._surface_size = QSize(int(width), int(height))
        logger.info("Graph layout initialised for %dx%d", int(width), int(height))
        if was_running or self.isVisible():
            self._loop.start()
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        size = event.size()
        if size != self._surface_size and size.width() > 0 and size.height() > 0:
            self.reset_layout(size.width(), size.height())

    def showEvent(self, event):
        super().showEvent(event)
        if self._surface_size.isEmpty():
            self.reset_layout(self.width(), self.height())
        self._loop.start()

    def hideEvent(self, event):
        self._loop.stop()
        super().hideEvent(event)

    def closeEvent(self, event):
        self._loop.stop()
        super().closeEvent(event)

    # ----------------------
    # Frame
    # ----------------------
    def _on_frame(self) -> None:
        self.simulation.tick(self.controller.dragged_id)
        self.update()

    def current_frame(self) -> Frame:
        return build_frame(self.catalog, self.simulation.nodes, self.controller.active_id)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.setRenderHint(QPainter.TextAntialiasing, True)
            self._paint_surface(painter)
            frame = self.current_frame()
            for edge in frame.edges:
                self._paint_edge(painter, edge)
            for draw in frame.nodes:
                self._paint_node(painter, draw)
        finally:
            painter.end()

    def _paint_surface(self, painter: QPainter) -> None:
        rect = QRectF(self.rect()).adjusted(0.5, 0.5, -0.5, -0.5)
        painter.setPen(QPen(self.SURFACE_BORDER, 1))
        painter.setBrush(self.SURFACE)
        painter.drawRoundedRect(rect, 12, 12)

    def _paint_edge(self, painter: QPainter, edge) -> None:
        if edge.style is EdgeStyle.HIGHLIGHTED:
            pen = QPen(self.EDGE_HIGHLIGHT, 2)
        elif edge.style is EdgeStyle.DIMMED:
            pen = QPen(self.EDGE_DIMMED, 1)
        else:
            pen = QPen(self.EDGE_DEFAULT, 1)
        painter.setPen(pen)
        painter.drawLine(QPointF(edge.source.x, edge.source.y), QPointF(edge.target.x, edge.target.y))

    def _paint_node(self, painter: QPainter, draw) -> None:
        n = draw.node
        center = QPointF(n.x, n.y)
        color = QColor(draw.color)
        active = draw.style is NodeStyle.ACTIVE
        painter.save()
        painter.setOpacity(draw.opacity)

        # Halo radial para el nodo activo
        if active:
            outer = n.radius + GLOW_WIDTH
            glow = QRadialGradient(center, outer)
            inner_color = QColor(color)
            inner_color.setAlphaF(0.3)
            clear = QColor(color)
            clear.setAlpha(0)
            glow.setColorAt(n.radius / outer, inner_color)
            glow.setColorAt(1.0, clear)
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(glow))
            painter.drawEllipse(center, outer, outer)

        fill = QColor(color)
        if not active:
            fill.setAlphaF(0.85)
        if active:
            border = QPen(self.BORDER_ACTIVE, 2.5)
        elif draw.style is NodeStyle.CONNECTED:
            border = QPen(self.BORDER_CONNECTED, 1)
        else:
            border = QPen(self.BORDER_NORMAL, 1)
        painter.setPen(border)
        painter.setBrush(fill)
        painter.drawEllipse(center, n.radius, n.radius)

        font = QFont(self.font())
        font.setPixelSize(draw.font_size)
        font.setBold(draw.bold)
        painter.setFont(font)
        painter.setPen(self.LABEL_DIMMED if draw.style is NodeStyle.DIMMED else self.LABEL)
        # El texto puede desbordar el círculo, como en la web
        label_rect = QRectF(n.x - 80, n.y - n.radius, 160, n.radius * 2)
        painter.drawText(label_rect, Qt.AlignCenter, n.label)
        painter.restore()

    # ----------------------
    # Mouse Events
    # ----------------------
    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position()
        self.controller.pointer_down(pos.x(), pos.y())
        self.update()
        event.accept()

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.controller.pointer_move(pos.x(), pos.y())
        if self.controller.drag is None:
            self.setCursor(Qt.PointingHandCursor if self.controller.cursor == CURSOR_POINTER else Qt.ArrowCursor)
        self.update()
        event.accept()

    def mouseReleaseEvent(self, event):
        self.controller.pointer_up()
        event.accept()

    def leaveEvent(self, event):
        self.controller.pointer_up()
        super().leaveEvent(event)

    # ----------------------
    # Selección (para el panel lateral)
    # ----------------------
    def select_node(self, node_id: Optional[str]) -> None:
        self.controller.select(node_id)
        self.update()

    def _emit_selection(self, node_id: Optional[str]) -> None:
        self.selectedNodeChanged.emit(node_id)

    def _emit_hover(self, node_id: Optional[str]) -> None:
        self.hoveredNodeChanged.emit(node_id)
