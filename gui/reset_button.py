import random

from PyQt6.QtCore import QElapsedTimer, QPoint, QTimer, pyqtSignal
from PyQt6.QtWidgets import QPushButton

from core.constants import RESET_HOLD_MS

SHAKE_INTERVAL_MS = 16
MAX_SHAKE_PX = 4


class HoldToResetButton(QPushButton):
    """Emits `reset_confirmed` only if held down for the whole hold duration."""
    reset_confirmed = pyqtSignal()

    def __init__(self, text="✕", parent=None, hold_ms=RESET_HOLD_MS):
        super().__init__(text, parent)
        self.setToolTip("Long press to Reset")
        self.setProperty("danger", True)
        self.hold_ms = hold_ms
        self._origin = None
        self._elapsed = QElapsedTimer()

        self._hold_timer = QTimer(self)
        self._hold_timer.setSingleShot(True)
        self._hold_timer.timeout.connect(self._on_hold_complete)

        self._shake_timer = QTimer(self)
        self._shake_timer.setInterval(SHAKE_INTERVAL_MS)
        self._shake_timer.timeout.connect(self._shake)

        self.pressed.connect(self._on_pressed)
        self.released.connect(self._cancel)

    def _on_pressed(self):
        self._origin = self.pos()
        self._elapsed.start()
        self._hold_timer.start(self.hold_ms)
        self._shake_timer.start()

    def _stop_shaking(self):
        self._shake_timer.stop()
        if self._origin is not None:
            self.move(self._origin)
            self._origin = None

    def _cancel(self):
        # released before the deadline, nothing happens
        self._hold_timer.stop()
        self._stop_shaking()

    def _on_hold_complete(self):
        self._stop_shaking()
        self.reset_confirmed.emit()

    def _shake(self):
        if self._origin is None:
            return
        progress = min(self._elapsed.elapsed() / self.hold_ms, 1.0)
        intensity = MAX_SHAKE_PX * progress
        offset = QPoint(round((random.random() - 0.5) * 2 * intensity),
                        round((random.random() - 0.5) * 2 * intensity))
        self.move(self._origin + offset)
