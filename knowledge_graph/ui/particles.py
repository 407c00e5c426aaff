"""knowledge_graph.ui.particles

Ambient particle background: slowly drifting dots that are pushed away from
(and brightened by) the pointer, with faint links between close neighbours.
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QColor, QPainter, QPen
from PySide6.QtWidgets import QWidget

from ..graph.frame_loop import FrameLoop

logger = logging.getLogger("knowledge_graph.particles")

AREA_PER_PARTICLE = 12000
MAX_PARTICLES = 200
INTERACTION_RADIUS = 150.0
LINK_DISTANCE = 120.0
OFFSCREEN = (-1000.0, -1000.0)


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    radius: float
    opacity: float
    base_opacity: float


class ParticleField:
    def __init__(self, width: float, height: float, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()
        self.width = float(width)
        self.height = float(height)
        self.pointer: Tuple[float, float] = OFFSCREEN
        self.particles: List[Particle] = []
        self.regenerate(width, height)

    @staticmethod
    def count_for(width: float, height: float) -> int:
        return max(0, min(int(width * height // AREA_PER_PARTICLE), MAX_PARTICLES))

    def regenerate(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        r = self._rng.random
        self.particles = [
            Particle(
                x=r() * self.width,
                y=r() * self.height,
                vx=(r() - 0.5) * 0.3,
                vy=(r() - 0.5) * 0.3,
                radius=r() * 2 + 0.5,
                opacity=r() * 0.5 + 0.1,
                base_opacity=r() * 0.5 + 0.1,
            )
            for _ in range(self.count_for(width, height))
        ]

    def step(self) -> None:
        mx, my = self.pointer
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            # Envolver por los bordes
            if p.x < 0:
                p.x = self.width
            elif p.x > self.width:
                p.x = 0.0
            if p.y < 0:
                p.y = self.height
            elif p.y > self.height:
                p.y = 0.0

            dx = p.x - mx
            dy = p.y - my
            dist = math.sqrt(dx * dx + dy * dy)
            if dist < INTERACTION_RADIUS:
                force = (INTERACTION_RADIUS - dist) / INTERACTION_RADIUS
                d = dist or 1.0
                p.vx += (dx / d) * force * 0.02
                p.vy += (dy / d) * force * 0.02
                p.opacity = p.base_opacity + force * 0.5
            else:
                p.opacity += (p.base_opacity - p.opacity) * 0.05

            p.vx *= 0.99
            p.vy *= 0.99

    def links(self) -> Iterator[Tuple[Particle, Particle, float]]:
        """Pairs closer than LINK_DISTANCE with their line alpha."""
        ps = self.particles
        for i in range(len(ps)):
            a = ps[i]
            for j in range(i + 1, len(ps)):
                b = ps[j]
                d = math.hypot(a.x - b.x, a.y - b.y)
                if d < LINK_DISTANCE:
                    yield a, b, 0.08 * (1 - d / LINK_DISTANCE)


class ParticleBackground(QWidget):
    """Container widget that paints the particle field behind its children."""

    PARTICLE_RGB = (180, 200, 255)
    LINE_RGB = (100, 140, 255)
    BACKGROUND = QColor(11, 15, 25)

    def __init__(self, parent: Optional[QWidget] = None, interval_ms: int = 16,
                 enabled: bool = True, rng: Optional[random.Random] = None) -> None:
        super().__init__(parent)
        self.field = ParticleField(0, 0, rng=rng)
        self._enabled = enabled
        self._loop = FrameLoop(self._on_frame, interval_ms, parent=self)
        self.setMouseTracking(True)
        self.setAutoFillBackground(False)

    @property
    def frame_loop(self) -> FrameLoop:
        return self._loop

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = bool(enabled)
        if self._enabled and self.isVisible():
            self._loop.start()
        else:
            self._loop.stop()
        self.update()

    def track_pointer(self, x: float, y: float) -> None:
        self.field.pointer = (x, y)

    def clear_pointer(self) -> None:
        self.field.pointer = OFFSCREEN

    def watch(self, widget: QWidget) -> None:
        """Follow the pointer while it is over a child widget that eats its mouse moves."""
        widget.setMouseTracking(True)
        widget.installEventFilter(self)

    def eventFilter(self, watched, event):
        if event.type() == QEvent.MouseMove and isinstance(watched, QWidget):
            pos = watched.mapTo(self, event.position().toPoint())
            self.track_pointer(pos.x(), pos.y())
        return super().eventFilter(watched, event)

    def _on_frame(self) -> None:
        self.field.step()
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        size = event.size()
        self.field.regenerate(size.width(), size.height())
        logger.debug("Particle field regenerated: %d particles", len(self.field.particles))

    def showEvent(self, event):
        super().showEvent(event)
        if self._enabled:
            self._loop.start()

    def hideEvent(self, event):
        self._loop.stop()
        super().hideEvent(event)

    def mouseMoveEvent(self, event):
        pos = event.position()
        self.track_pointer(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def leaveEvent(self, event):
        self.clear_pointer()
        super().leaveEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.fillRect(self.rect(), self.BACKGROUND)
            if not self._enabled:
                return
            painter.setRenderHint(QPainter.Antialiasing, True)
            painter.setOpacity(0.6)
            lr, lg, lb = self.LINE_RGB
            for a, b, alpha in self.field.links():
                painter.setPen(QPen(QColor(lr, lg, lb, int(alpha * 255)), 0.5))
                painter.drawLine(QPointF(a.x, a.y), QPointF(b.x, b.y))
            pr, pg, pb = self.PARTICLE_RGB
            painter.setPen(Qt.NoPen)
            for p in self.field.particles:
                painter.setBrush(QColor(pr, pg, pb, int(min(p.opacity, 1.0) * 255)))
                painter.drawEllipse(QPointF(p.x, p.y), p.radius, p.radius)
        finally:
            painter.end()
