"""
Notification Service - transient info messages and yes/no confirmations.

Architecture Decision: One message slot, three states
IDLE -> SHOWING_INFO -> IDLE (after a timeout)
any  -> SHOWING_CONFIRM -> IDLE (after confirm() / cancel())

Only one message is visible at a time. The auto-hide is a single owned
single-shot QTimer; restarting it cancels whatever hide was pending, so an
old message's timeout can never hide a newer one.
"""

import logging
from enum import Enum
from typing import Callable, Optional
from PySide6.QtCore import QObject, QTimer, Signal

logger = logging.getLogger(__name__)


class NotificationState(Enum):
    IDLE = "idle"
    SHOWING_INFO = "showing_info"
    SHOWING_CONFIRM = "showing_confirm"


class NotificationService(QObject):
    """
    Mediates user-facing messages for the view layer.

    A confirmation holds exactly one pending (on_confirm, on_cancel) pair.
    Requesting another confirmation replaces the pair; the replaced callbacks
    are dropped and never called.
    """

    state_changed = Signal(object)  # NotificationState
    message_changed = Signal(str)
    notification_visibility_changed = Signal(bool)
    confirmation_visibility_changed = Signal(bool)

    DEFAULT_DURATION_MS = 3000

    def __init__(self, duration_ms: int = DEFAULT_DURATION_MS, parent=None):
        super().__init__(parent)
        self._state = NotificationState.IDLE
        self._message: Optional[str] = None
        self._on_confirm: Optional[Callable[[], None]] = None
        self._on_cancel: Optional[Callable[[], None]] = None
        self._confirmation_id = 0

        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.setInterval(duration_ms)
        self._hide_timer.timeout.connect(self._on_hide_timeout)

    @property
    def state(self) -> NotificationState:
        return self._state

    @property
    def duration_ms(self) -> int:
        return self._hide_timer.interval()

    @property
    def current_message(self) -> Optional[str]:
        return self._message

    @property
    def current_notification_message(self) -> Optional[str]:
        return self._message if self._state is NotificationState.SHOWING_INFO else None

    @property
    def current_confirmation_message(self) -> Optional[str]:
        return self._message if self._state is NotificationState.SHOWING_CONFIRM else None

    @property
    def has_pending_confirmation(self) -> bool:
        return self._state is NotificationState.SHOWING_CONFIRM

    def is_hide_pending(self) -> bool:
        return self._hide_timer.isActive()

    def show_notification(self, message: str):
        """Show an info message that hides itself after ``duration_ms``"""
        self._hide_timer.stop()
        if self._state is NotificationState.SHOWING_CONFIRM:
            logger.debug("Info message replaces pending confirmation")
        self._clear_callbacks()
        self._publish(NotificationState.SHOWING_INFO, message)
        self._hide_timer.start()

    def show_confirmation(self, message: str,
                          on_confirm: Callable[[], None],
                          on_cancel: Optional[Callable[[], None]] = None):
        """Ask a yes/no question, replacing any pending one"""
        self._hide_timer.stop()
        if self._state is NotificationState.SHOWING_CONFIRM:
            logger.debug("Pending confirmation replaced")
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel
        self._confirmation_id += 1
        self._publish(NotificationState.SHOWING_CONFIRM, message)

    def confirm(self):
        """Run the pending confirm callback, then return to idle"""
        if self._state is not NotificationState.SHOWING_CONFIRM:
            return
        self._resolve(self._on_confirm)

    def cancel(self):
        """Run the pending cancel callback (if any), then return to idle"""
        if self._state is not NotificationState.SHOWING_CONFIRM:
            return
        self._resolve(self._on_cancel)

    def clear_confirmation(self):
        self.cancel()

    def _resolve(self, callback: Optional[Callable[[], None]]):
        confirmation_id = self._confirmation_id
        self._clear_callbacks()
        try:
            if callback is not None:
                callback()
        finally:
            # The callback may have shown a new message; leave that one alone
            if (self._state is NotificationState.SHOWING_CONFIRM
                    and self._confirmation_id == confirmation_id):
                self._publish(NotificationState.IDLE, None)

    def _clear_callbacks(self):
        self._on_confirm = None
        self._on_cancel = None

    def _on_hide_timeout(self):
        if self._state is NotificationState.SHOWING_INFO:
            self._publish(NotificationState.IDLE, None)

    def _publish(self, state: NotificationState, message: Optional[str]):
        """Single place where state and message change and listeners hear about it"""
        old_state, old_message = self._state, self._message
        self._state = state
        self._message = message

        if message != old_message:
            self.message_changed.emit(message or "")
        if state is old_state:
            return

        logger.debug(f"Notification state {old_state.value} -> {state.value}")
        self.state_changed.emit(state)

        was_info = old_state is NotificationState.SHOWING_INFO
        is_info = state is NotificationState.SHOWING_INFO
        if was_info != is_info:
            self.notification_visibility_changed.emit(is_info)

        was_confirm = old_state is NotificationState.SHOWING_CONFIRM
        is_confirm = state is NotificationState.SHOWING_CONFIRM
        if was_confirm != is_confirm:
            self.confirmation_visibility_changed.emit(is_confirm)
