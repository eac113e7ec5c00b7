"""
Task Timer View Model - one row of the task list.

Wraps a domain ``TaskTimer`` with the display fields the window binds to and
the commands it issues. It is the handle the coordinator registers, and it
reports committed changes to the dirty tracker.
"""

import datetime
import logging
import uuid
from typing import Optional
from PySide6.QtCore import QObject, Signal

from worktime.domain.models import TaskTimer
from worktime.services.dirty_tracking_service import DirtyTrackingService
from worktime.services.timer_coordination_service import TimerCoordinationService
from worktime.utils import format_duration

logger = logging.getLogger(__name__)


class TaskTimerViewModel(QObject):
    """
    Presentation state and commands for a single task timer.

    Description edits are transient: typing changes the task immediately but
    only ``commit_description()`` (focus lost / Enter) marks it as a change
    worth saving, and only if the text actually differs from the last commit.
    """

    elapsed_changed = Signal(str)  # formatted elapsed
    running_changed = Signal(bool)
    description_changed = Signal(str)

    def __init__(self, task: TaskTimer,
                 coordinator: TimerCoordinationService,
                 dirty_tracker: DirtyTrackingService,
                 adjust_step_minutes: int = 15,
                 parent=None):
        super().__init__(parent)
        if task is None:
            raise ValueError("task is required")
        self.handle_id = uuid.uuid4().hex
        self.task = task
        self.coordinator = coordinator
        self.dirty_tracker = dirty_tracker
        self.adjust_step = datetime.timedelta(minutes=adjust_step_minutes)
        self._committed_description = task.description

        self.coordinator.register(self)

    # --- Display fields ---

    @property
    def description(self) -> str:
        return self.task.description

    @description.setter
    def description(self, value: str):
        if self.task.description != value:
            self.task.description = value
            self.description_changed.emit(value)

    @property
    def is_running(self) -> bool:
        return self.task.is_running

    @property
    def elapsed_seconds(self) -> float:
        return self.task.current_elapsed().total_seconds()

    @property
    def elapsed_formatted(self) -> str:
        return format_duration(self.task.current_elapsed())

    # --- Commands ---

    def commit_description(self):
        """Mark the description as updated if it changed since the last commit"""
        if self._committed_description != self.task.description:
            self._committed_description = self.task.description
            self.dirty_tracker.mark_task_updated()

    def start(self, now: Optional[datetime.datetime] = None):
        if self.task.is_running:
            return
        self.coordinator.stop_all_except(self)
        self.task.start(now)
        logger.info(f"Started '{self.task.description}'")
        self.running_changed.emit(True)
        self.dirty_tracker.mark_timer_changed()

    def stop(self, now: Optional[datetime.datetime] = None):
        self.stop_timer(now)

    def stop_timer(self, now: Optional[datetime.datetime] = None):
        """Stop the timer; called by the stop command and by the coordinator"""
        if not self.task.is_running:
            return
        self.task.stop(now)
        logger.info(f"Stopped '{self.task.description}' at {self.elapsed_formatted}")
        self.running_changed.emit(False)
        self.elapsed_changed.emit(self.elapsed_formatted)
        self.dirty_tracker.mark_timer_changed()

    def reset(self):
        was_running = self.task.is_running
        self.task.reset()
        if was_running:
            self.running_changed.emit(False)
        self.elapsed_changed.emit(self.elapsed_formatted)
        self.dirty_tracker.mark_timer_changed()

    def adjust(self, delta: datetime.timedelta, now: Optional[datetime.datetime] = None):
        self.task.adjust(delta, now)
        self.elapsed_changed.emit(self.elapsed_formatted)
        self.dirty_tracker.mark_timer_changed()

    def add_step(self):
        self.adjust(self.adjust_step)

    def subtract_step(self):
        self.adjust(-self.adjust_step)

    def refresh(self, now: Optional[datetime.datetime] = None):
        """Roll a running timer forward for display; no-op when stopped"""
        if not self.task.is_running:
            return
        self.task.refresh(now)
        self.elapsed_changed.emit(self.elapsed_formatted)

    def cleanup(self):
        """Detach from the coordinator; a running timer is stopped silently"""
        if self.task.is_running:
            self.task.stop()
        self.coordinator.unregister(self)


class TaskTimerViewModelFactory:
    """Creates row view models wired to the shared services"""

    def __init__(self, coordinator: TimerCoordinationService,
                 dirty_tracker: DirtyTrackingService,
                 adjust_step_minutes: int = 15):
        self.coordinator = coordinator
        self.dirty_tracker = dirty_tracker
        self.adjust_step_minutes = adjust_step_minutes

    def create(self, task: TaskTimer) -> TaskTimerViewModel:
        return TaskTimerViewModel(
            task,
            self.coordinator,
            self.dirty_tracker,
            adjust_step_minutes=self.adjust_step_minutes,
        )
