"""
Clock Service - the one recurring tick that drives display refresh.

Owned by the main view model; started when it is created and stopped on
cleanup.
"""

import datetime
import logging
from PySide6.QtCore import QObject, QTimer, Signal

logger = logging.getLogger(__name__)


class ClockService(QObject):
    """Wraps a repeating QTimer and publishes the wall-clock time each tick"""

    tick = Signal(str, str)  # (current_time, current_date)

    TIME_FORMAT = "%H:%M:%S"
    DATE_FORMAT = "%Y-%m-%d"

    def __init__(self, interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self.timer = QTimer(self)
        self.timer.setInterval(interval_ms)
        self.timer.timeout.connect(self._on_tick)

    @property
    def interval_ms(self) -> int:
        return self.timer.interval()

    def start(self):
        if not self.timer.isActive():
            self.timer.start()
            logger.debug(f"Clock started ({self.timer.interval()} ms)")

    def stop(self):
        if self.timer.isActive():
            self.timer.stop()
            logger.debug("Clock stopped")

    def is_running(self) -> bool:
        return self.timer.isActive()

    def current_time(self) -> str:
        return datetime.datetime.now().strftime(self.TIME_FORMAT)

    def current_date(self) -> str:
        return datetime.datetime.now().strftime(self.DATE_FORMAT)

    def _on_tick(self):
        now = datetime.datetime.now()
        self.tick.emit(now.strftime(self.TIME_FORMAT), now.strftime(self.DATE_FORMAT))
