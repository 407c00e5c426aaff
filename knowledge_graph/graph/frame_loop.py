from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QObject, QTimer

logger = logging.getLogger("knowledge_graph.frame_loop")


class FrameLoop(QObject):
    """Repeating per-frame task on the Qt event loop.

    Each frame is scheduled only after the previous callback returned, so a
    slow frame delays the next one instead of queueing several. `stop()`
    cancels the pending frame; `start()` on a running loop does nothing.
    """

    def __init__(self, callback: Callable[[], None], interval_ms: int = 16,
                 parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._callback = callback
        self._running = False
        self.frames = 0
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def running(self) -> bool:
        return self._running

    @property
    def interval(self) -> int:
        return self._timer.interval()

    def set_interval(self, interval_ms: int) -> None:
        self._timer.setInterval(max(1, int(interval_ms)))

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._timer.start()
        logger.debug("Frame loop started (%d ms)", self._timer.interval())

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._timer.stop()
        logger.debug("Frame loop stopped after %d frames", self.frames)

    def restart(self) -> None:
        self.stop()
        self.start()

    def step(self) -> None:
        """Run one frame synchronously without touching the schedule."""
        self._callback()
        self.frames += 1

    def _on_timeout(self) -> None:
        if not self._running:
            return
        try:
            self.step()
        except Exception:
            # Un frame fallido no debe detener la animación
            logger.exception("Frame callback failed")
        if self._running:
            self._timer.start()
