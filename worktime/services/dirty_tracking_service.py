"""
Dirty Tracking Service - knows whether there is anything worth saving.

Architecture Decision: Observer Pattern (Qt Signals)
Only committed changes are tracked (not every keystroke). The signal is
edge-triggered: it fires on the clean->dirty and dirty->clean transitions,
never once per mark call.
"""

import logging
from PySide6.QtCore import QObject, Signal

logger = logging.getLogger(__name__)


class DirtyTrackingService(QObject):
    """Single unsaved-changes flag with change notification"""

    dirty_state_changed = Signal(bool)  # has_unsaved_changes

    def __init__(self, parent=None):
        super().__init__(parent)
        self._has_unsaved_changes = False

    @property
    def has_unsaved_changes(self) -> bool:
        return self._has_unsaved_changes

    def _set_dirty(self, value: bool):
        if self._has_unsaved_changes == value:
            return
        self._has_unsaved_changes = value
        logger.debug(f"Unsaved changes: {value}")
        self.dirty_state_changed.emit(value)

    def mark_task_created(self):
        self._set_dirty(True)

    def mark_task_updated(self):
        self._set_dirty(True)

    def mark_task_deleted(self):
        self._set_dirty(True)

    def mark_timer_changed(self):
        self._set_dirty(True)

    def mark_saved(self):
        self._set_dirty(False)
