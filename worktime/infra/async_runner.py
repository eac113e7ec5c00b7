"""
Async Runner - drives persistence coroutines from the Qt event loop.

Architecture Decision: Step the asyncio loop from a QTimer
Coroutines are scheduled as tasks on a private asyncio loop. While any task is
pending, a short QTimer runs one non-blocking pass of that loop, so file I/O
(already on a worker thread via ``asyncio.to_thread``) never stalls the Qt
thread, and everything after an ``await`` still runs on the Qt thread.
"""

import asyncio
import logging
from typing import Any, Callable, Coroutine, Optional, Set
from PySide6.QtCore import QObject, QTimer, Signal

logger = logging.getLogger(__name__)


class AsyncRunner(QObject):
    """Owns the asyncio loop used by the view layer"""

    finished = Signal(object)  # result of a submitted coroutine
    failed = Signal(object)  # exception raised by a submitted coroutine

    DEFAULT_INTERVAL_MS = 10

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None,
                 interval_ms: int = DEFAULT_INTERVAL_MS, parent=None):
        super().__init__(parent)
        self.loop = loop or asyncio.new_event_loop()
        self._pending: Set[asyncio.Task] = set()

        self._pump = QTimer(self)
        self._pump.setInterval(interval_ms)
        self._pump.timeout.connect(self._step)

    def submit(self, coro: Coroutine, on_done: Optional[Callable[[Any], None]] = None) -> asyncio.Task:
        """
        Schedule ``coro`` and return immediately.

        Args:
            coro: Coroutine to run
            on_done: Called on the Qt thread with the result on success

        Returns:
            The scheduled task
        """
        task = self.loop.create_task(coro)
        self._pending.add(task)
        task.add_done_callback(lambda t: self._on_task_done(t, on_done))
        if not self._pump.isActive():
            self._pump.start()
        return task

    def has_pending(self) -> bool:
        return bool(self._pending)

    def run_until_complete(self, coro: Coroutine) -> Any:
        """Blocking run, for shutdown only (the window is already closing)"""
        return self.loop.run_until_complete(coro)

    def close(self):
        """Cancel whatever is still pending and close the loop"""
        self._pump.stop()
        if self._pending:
            for task in list(self._pending):
                task.cancel()
            self.loop.run_until_complete(asyncio.gather(*self._pending, return_exceptions=True))
        self.loop.close()
        logger.debug("Async runner closed")

    def _step(self):
        # stop() is processed after the callbacks already queued, so this
        # runs exactly one pass and never waits for I/O
        self.loop.call_soon(self.loop.stop)
        self.loop.run_forever()
        if not self._pending:
            self._pump.stop()

    def _on_task_done(self, task: asyncio.Task, on_done: Optional[Callable[[Any], None]]):
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error("Background task failed", exc_info=error)
            self.failed.emit(error)
            return
        result = task.result()
        if on_done is not None:
            on_done(result)
        self.finished.emit(result)
