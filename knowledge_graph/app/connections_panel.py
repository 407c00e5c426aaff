from __future__ import annotations

from typing import Optional

from PySide6 import QtCore, QtGui, QtWidgets

from ..graph.graph_view import GraphCanvas


def dot_icon(color: str, size: int = 10) -> QtGui.QIcon:
    pix = QtGui.QPixmap(size, size)
    pix.fill(QtCore.Qt.transparent)
    p = QtGui.QPainter(pix)
    try:
        p.setRenderHint(QtGui.QPainter.Antialiasing, True)
        p.setPen(QtCore.Qt.NoPen)
        p.setBrush(QtGui.QColor(color))
        p.drawEllipse(0, 0, size - 1, size - 1)
    finally:
        p.end()
    return QtGui.QIcon(pix)


class ConnectionsPanel(QtWidgets.QFrame):
    """Panel lateral con el nodo seleccionado y sus conexiones directas.

    - Muestra etiqueta, grupo y número de conexiones.
    - Cada conexión es clicable y selecciona ese nodo en el lienzo,
      de modo que se puede recorrer el grafo desde el panel.
    - Se oculta cuando no hay selección.
    """

    MARGIN = 12

    def __init__(self, canvas: GraphCanvas, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self._canvas = canvas
        self.setObjectName("ConnectionsPanel")
        self.setFixedWidth(208)

        root = QtWidgets.QVBoxLayout(self)
        root.setContentsMargins(14, 12, 14, 12)
        root.setSpacing(6)

        header = QtWidgets.QHBoxLayout()
        header.setSpacing(8)
        self._dot = QtWidgets.QLabel(self)
        self._dot.setFixedSize(12, 12)
        self._title = QtWidgets.QLabel("", self)
        self._title.setStyleSheet("color:#f1f5f9;font-weight:700;font-size:13px;")
        header.addWidget(self._dot)
        header.addWidget(self._title, 1)

        self._subtitle = QtWidgets.QLabel("", self)
        self._subtitle.setStyleSheet("color:#94a3b8;font-size:10px;letter-spacing:1px;")

        self._list = QtWidgets.QListWidget(self)
        self._list.setFrameShape(QtWidgets.QFrame.NoFrame)
        self._list.setCursor(QtCore.Qt.PointingHandCursor)
        self._list.setStyleSheet(
            "QListWidget{background:transparent;color:#94a3b8;font-size:12px;}"
            "QListWidget::item{padding:3px 6px;border-radius:4px;}"
            "QListWidget::item:hover{background:#1e293b;color:#f1f5f9;}"
        )
        self._list.itemClicked.connect(self._on_item_clicked)

        root.addLayout(header)
        root.addWidget(self._subtitle)
        root.addWidget(self._list, 1)

        self.setStyleSheet(
            "#ConnectionsPanel{background:rgba(15,23,42,242);border:1px solid #1e293b;border-radius:8px;}"
        )

        self._canvas.selectedNodeChanged.connect(self.refresh)
        # Superpuesto en la esquina superior derecha del lienzo
        if self.parentWidget() is self._canvas:
            self._canvas.installEventFilter(self)
        self.refresh()

    def eventFilter(self, watched, event):
        if watched is self._canvas and event.type() == QtCore.QEvent.Resize:
            self._reposition()
        return super().eventFilter(watched, event)

    def _reposition(self) -> None:
        self.move(self._canvas.width() - self.width() - self.MARGIN, self.MARGIN)

    # -----------------------------
    # Estado
    # -----------------------------
    def connection_ids(self) -> list:
        return [self._list.item(i).data(QtCore.Qt.UserRole) for i in range(self._list.count())]

    def title(self) -> str:
        return self._title.text()

    def subtitle(self) -> str:
        return self._subtitle.text()

    def refresh(self, *_args) -> None:
        info = self._canvas.controller.selection_info()
        self._list.clear()
        if info is None:
            self.setVisible(False)
            return
        catalog = self._canvas.catalog
        node = info.node
        self._dot.setPixmap(dot_icon(catalog.color_for(node.group), 12).pixmap(12, 12))
        self._title.setText(node.label)
        noun = "connection" if info.connection_count == 1 else "connections"
        self._subtitle.setText(f"{node.group.upper()} · {info.connection_count} {noun}")
        for other in info.connections:
            item = QtWidgets.QListWidgetItem(dot_icon(catalog.color_for(other.group), 8), other.label)
            item.setData(QtCore.Qt.UserRole, other.id)
            self._list.addItem(item)
        if self.parentWidget() is self._canvas:
            self.setMaximumHeight(max(120, self._canvas.height() - 2 * self.MARGIN))
            self.adjustSize()
            self._reposition()
        self.setVisible(True)

    def _on_item_clicked(self, item: QtWidgets.QListWidgetItem) -> None:
        node_id = item.data(QtCore.Qt.UserRole)
        if node_id:
            self._canvas.select_node(str(node_id))
