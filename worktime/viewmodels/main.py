"""
Main View Model - the command boundary between the window and the services.

Architecture Decision: Errors stop here
The persistence layer raises; this class catches ``PersistenceError``, logs it
and turns it into a transient notification. Nothing below the window ever
sees an exception from a save, load or export, and nothing is retried
automatically.
"""

import datetime
import logging
from pathlib import Path
from typing import List, Optional
from PySide6.QtCore import QObject, Signal

from worktime.domain.models import TaskTimer
from worktime.domain.exceptions import PersistenceError
from worktime.i18n import tr
from worktime.services.clock_service import ClockService
from worktime.services.dirty_tracking_service import DirtyTrackingService
from worktime.services.notification_service import NotificationService
from worktime.services.persistence_service import DataPersistenceService
from worktime.services.timer_coordination_service import TimerCoordinationService
from worktime.utils import format_duration
from worktime.viewmodels.task_timer import TaskTimerViewModel, TaskTimerViewModelFactory

logger = logging.getLogger(__name__)


class MainViewModel(QObject):
    """
    Owns the ordered task list and the periodic clock.
    """

    tasks_changed = Signal()
    total_changed = Signal(str)  # formatted total
    clock_tick = Signal(str, str)  # (current_time, current_date)

    def __init__(self,
                 persistence: DataPersistenceService,
                 notifications: NotificationService,
                 dirty_tracker: DirtyTrackingService,
                 coordinator: TimerCoordinationService,
                 factory: TaskTimerViewModelFactory,
                 clock: ClockService,
                 delete_label_max_length: int = 15,
                 parent=None):
        super().__init__(parent)
        self.persistence = persistence
        self.notifications = notifications
        self.dirty_tracker = dirty_tracker
        self.coordinator = coordinator
        self.factory = factory
        self.clock = clock
        self.delete_label_max_length = delete_label_max_length

        self.tasks: List[TaskTimerViewModel] = []
        self.current_time = clock.current_time()
        self.current_date = clock.current_date()

        self.clock.tick.connect(self._on_clock_tick)
        self.clock.start()

    # --- Display fields ---

    @property
    def total_seconds(self) -> float:
        return sum(vm.elapsed_seconds for vm in self.tasks)

    @property
    def total_time_formatted(self) -> str:
        return tr("main.total", time=format_duration(self.total_seconds))

    @property
    def has_unsaved_changes(self) -> bool:
        return self.dirty_tracker.has_unsaved_changes

    def can_restore_state(self) -> bool:
        return self.persistence.has_saved_state()

    # --- Task commands ---

    def add_task(self, description: str = "") -> TaskTimerViewModel:
        vm = self._attach(TaskTimer(description=description))
        self.tasks.append(vm)
        self.dirty_tracker.mark_task_created()
        self._emit_list_changed()
        self.notifications.show_notification(tr("notify.task_added"))
        return vm

    def remove_task(self, vm: Optional[TaskTimerViewModel]):
        """Ask for confirmation, then delete ``vm``"""
        if vm is None or vm not in self.tasks:
            return
        label = self._truncate(vm.description, self.delete_label_max_length)
        self.notifications.show_confirmation(
            tr("confirm.delete", name=label),
            on_confirm=lambda: self._confirm_delete(vm),
        )

    def clear_all_timers(self):
        """Ask for confirmation, then stop and zero every timer"""
        self.notifications.show_confirmation(
            tr("confirm.reset_all"),
            on_confirm=self._confirm_clear_all,
        )

    def start_task(self, vm: TaskTimerViewModel):
        vm.start()

    def stop_task(self, vm: TaskTimerViewModel):
        vm.stop()

    def adjust_task(self, vm: TaskTimerViewModel, minutes: int):
        vm.adjust(datetime.timedelta(minutes=minutes))
        self.total_changed.emit(self.total_time_formatted)

    def commit_description(self, vm: TaskTimerViewModel):
        vm.commit_description()

    def confirm(self):
        self.notifications.confirm()

    def cancel(self):
        self.notifications.cancel()

    # --- Persistence commands ---

    async def export_data(self, file_name: Optional[str] = None) -> Optional[Path]:
        """Write the text report; returns its path, or None on failure"""
        try:
            path = await self.persistence.export_report([vm.task for vm in self.tasks], file_name)
        except PersistenceError as e:
            logger.error(f"Export failed: {e}")
            self.notifications.show_notification(tr("notify.export_failed", error=e))
            return None
        self.notifications.show_notification(tr("notify.exported", file=path))
        return path

    async def save_application_state(self, notify: bool = True) -> bool:
        try:
            await self.persistence.save_state([vm.task for vm in self.tasks])
        except PersistenceError as e:
            logger.error(f"Save failed: {e}")
            self.notifications.show_notification(tr("notify.save_failed", error=e))
            return False
        self.dirty_tracker.mark_saved()
        if notify:
            self.notifications.show_notification(tr("notify.state_saved"))
        return True

    async def load_data(self) -> bool:
        """Replace the task list with the saved one, if there is one"""
        try:
            timers = await self.persistence.load_state()
        except PersistenceError as e:
            logger.error(f"Load failed: {e}")
            self.notifications.show_notification(tr("notify.load_failed", error=e))
            return False

        if timers is None:
            self.notifications.show_notification(tr("notify.no_saved_data"))
            return False

        for vm in self.tasks:
            vm.cleanup()
        self.tasks = [self._attach(timer) for timer in timers]
        self.dirty_tracker.mark_saved()
        self._emit_list_changed()
        self.notifications.show_notification(tr("notify.state_loaded", count=len(self.tasks)))
        return True

    async def save_on_exit(self) -> bool:
        return await self.save_application_state(notify=False)

    def cleanup(self):
        """Stop the clock and release every timer"""
        self.clock.stop()
        for vm in self.tasks:
            vm.cleanup()
        logger.debug("Main view model cleaned up")

    # --- Internals ---

    def _attach(self, task: TaskTimer) -> TaskTimerViewModel:
        vm = self.factory.create(task)
        vm.elapsed_changed.connect(self._emit_total)
        vm.running_changed.connect(self._emit_total)
        return vm

    def _confirm_delete(self, vm: TaskTimerViewModel):
        if vm not in self.tasks:
            return
        vm.cleanup()
        self.tasks.remove(vm)
        self.dirty_tracker.mark_task_deleted()
        self._emit_list_changed()
        self.notifications.show_notification(tr("notify.task_deleted"))

    def _confirm_clear_all(self):
        self.coordinator.stop_all_except(None)
        for vm in self.tasks:
            vm.reset()
        self._emit_total()
        self.notifications.show_notification(tr("notify.timers_reset"))

    def _on_clock_tick(self, current_time: str, current_date: str):
        self.current_time = current_time
        self.current_date = current_date
        for vm in self.tasks:
            vm.refresh()
        self.clock_tick.emit(current_time, current_date)
        self._emit_total()

    def _emit_list_changed(self):
        self.tasks_changed.emit()
        self._emit_total()

    def _emit_total(self, *_):
        self.total_changed.emit(self.total_time_formatted)

    @staticmethod
    def _truncate(value: str, max_length: int) -> str:
        if not value or len(value) <= max_length:
            return value
        return value[:max_length - 1] + "…"
