"""
Animation Scheduler
===================
Owns the single repeating timer that advances the selected year.

At most one timer handle is alive at any time: `start` creates it, `stop`
cancels and releases it.
"""
import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal

from animatedscatter.config import ANIMATION_INTERVAL

logger = logging.getLogger(__name__)


class AnimationScheduler(QObject):
    tick = Signal()

    def __init__(self, interval: int = ANIMATION_INTERVAL, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._interval = interval
        self._timer: Optional[QTimer] = None

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        if self._timer is not None:
            logger.debug("Scheduler already running, start ignored.")
            return
        self._timer = QTimer(self)
        self._timer.setInterval(self._interval)
        self._timer.timeout.connect(self.tick)
        self._timer.start()
        logger.debug(f"Scheduler started ({self._interval} ms).")

    def stop(self) -> None:
        if self._timer is None:
            return
        self._timer.stop()
        self._timer.timeout.disconnect(self.tick)
        self._timer.deleteLater()
        self._timer = None
        logger.debug("Scheduler stopped.")
