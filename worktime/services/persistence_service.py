"""
Data Persistence Service - maps live task timers to storage and back.

Architecture Decision: Snapshot before I/O
``save_state`` builds a frozen ``ApplicationStateEntity`` synchronously,
before its first ``await``. Whatever happens to the task list while the file
is being written (a delete, a timer start) cannot leak into that save.

Running state is not durable: timers are written as stopped and always come
back stopped.
"""

import datetime
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from worktime.domain.models import TaskTimer, TaskTimerEntity, ApplicationStateEntity
from worktime.infra.repository import JsonTaskRepository
from worktime.services.report_service import ReportService

logger = logging.getLogger(__name__)


class DataPersistenceService:
    """
    Facade over the repository for saving, loading and exporting tasks.

    Errors from the repository (``CorruptStateError``, ``StorageIOError``)
    propagate unchanged; turning them into user messages is the caller's job.
    """

    def __init__(self, repository: JsonTaskRepository,
                 report_service: Optional[ReportService] = None,
                 export_dir: Optional[Path] = None):
        self.repository = repository
        self.report_service = report_service or ReportService()
        self.export_dir = export_dir

    async def save_state(self, tasks: Sequence[TaskTimer]) -> ApplicationStateEntity:
        """
        Persist ``tasks`` in order, replacing whatever was stored.

        Returns:
            The snapshot that was written
        """
        state = self.snapshot(tasks)
        await self.repository.save_state(state)
        return state

    async def load_state(self) -> Optional[List[TaskTimer]]:
        """
        Rebuild the saved task list.

        Returns:
            Fresh, stopped timers in saved order, or None when nothing (or an
            empty list) was saved
        """
        state = await self.repository.load_state()
        if state is None or not state.tasks:
            return None
        return [self._to_timer(entity) for entity in state.tasks]

    async def export_report(self, tasks: Sequence[TaskTimer],
                            file_name: Optional[str] = None) -> Path:
        """
        Write the plain-text report.

        Args:
            tasks: Tasks in display order
            file_name: Target file; defaults to a timestamped name in the
                export directory

        Returns:
            Path of the written file
        """
        now = datetime.datetime.now()
        entities = [self._to_entity(task, now) for task in tasks]
        content = self.report_service.render_export(entities, generated_at=now)

        if file_name:
            target = Path(file_name)
        else:
            name = self.report_service.generate_export_filename(now)
            target = self.export_dir / name if self.export_dir else Path(name)

        return await self.repository.export_to_text(content, target)

    def has_saved_state(self) -> bool:
        return self.repository.has_saved_state()

    def snapshot(self, tasks: Sequence[TaskTimer]) -> ApplicationStateEntity:
        """Immutable storage snapshot of ``tasks`` as of now"""
        now = datetime.datetime.now()
        return ApplicationStateEntity(
            tasks=[self._to_entity(task, now) for task in tasks],
            saved_at=now,
        )

    @staticmethod
    def _to_entity(task: TaskTimer, now: datetime.datetime) -> TaskTimerEntity:
        return TaskTimerEntity(
            description=task.description,
            elapsed_seconds=task.current_elapsed(now).total_seconds(),
            is_running=False,
            start_time=None,
            last_modified=now,
        )

    @staticmethod
    def _to_timer(entity: TaskTimerEntity) -> TaskTimer:
        return TaskTimer(
            description=entity.description,
            elapsed=datetime.timedelta(seconds=entity.elapsed_seconds),
        )
