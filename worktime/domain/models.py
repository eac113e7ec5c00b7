"""
Domain models.

Architecture Decision: Behaviour vs. storage records
``TaskTimer`` is the live stopwatch the rest of the app mutates. The storage
records (``TaskTimerEntity``, ``ApplicationStateEntity``) are Pydantic models so
the JSON state file is validated on load and serialized with its on-disk
(PascalCase) field names. The mapping between the two is deliberately lossy:
running state never reaches disk.
"""

from datetime import datetime, timedelta
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


SCHEMA_VERSION = "2.0.0"


class TaskTimer:
    """
    Stopwatch for a single task.

    Elapsed time is only sampled when ``stop()``, ``refresh()`` or ``adjust()``
    runs; ``current_elapsed()`` gives the live value without mutating anything.
    Every method that reads the clock takes an optional ``now`` so callers can
    drive it deterministically.
    """

    def __init__(self, description: str = "", elapsed: Optional[timedelta] = None):
        if elapsed is not None and elapsed < timedelta(0):
            raise ValueError("elapsed must not be negative")
        self.description = description
        self._elapsed = elapsed if elapsed is not None else timedelta(0)
        self._started_at: Optional[datetime] = None

    def __repr__(self) -> str:
        return (f"TaskTimer(description={self.description!r}, "
                f"elapsed={self._elapsed!r}, running={self.is_running})")

    @property
    def elapsed(self) -> timedelta:
        return self._elapsed

    @property
    def elapsed_seconds(self) -> float:
        return self._elapsed.total_seconds()

    @property
    def is_running(self) -> bool:
        return self._started_at is not None

    @property
    def started_at(self) -> Optional[datetime]:
        return self._started_at

    def current_elapsed(self, now: Optional[datetime] = None) -> timedelta:
        """Elapsed time including the not-yet-sampled running portion"""
        if self._started_at is None:
            return self._elapsed
        return self._elapsed + self._since_start(now or datetime.now())

    def start(self, now: Optional[datetime] = None) -> None:
        if self._started_at is not None:
            return
        self._started_at = now or datetime.now()

    def stop(self, now: Optional[datetime] = None) -> None:
        if self._started_at is None:
            return
        self._elapsed += self._since_start(now or datetime.now())
        self._started_at = None

    def refresh(self, now: Optional[datetime] = None) -> None:
        """Roll the running portion into elapsed and restart the sample window."""
        if self._started_at is None:
            return
        now = now or datetime.now()
        self._elapsed += self._since_start(now)
        self._started_at = now

    def reset(self) -> None:
        self._elapsed = timedelta(0)
        self._started_at = None

    def adjust(self, delta: timedelta, now: Optional[datetime] = None) -> None:
        """Manual correction; never drops below zero."""
        self.refresh(now)
        self._elapsed = max(timedelta(0), self._elapsed + delta)

    def _since_start(self, now: datetime) -> timedelta:
        # A wall clock stepping backwards must not shrink elapsed time
        return max(timedelta(0), now - self._started_at)


class StorageRecord(BaseModel):
    """
    Base for on-disk records.

    Keys are matched to field aliases ignoring case and underscores, so
    ``elapsedSeconds``, ``elapsed_seconds`` and ``ElapsedSeconds`` all load.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup = {}
        for name, field in cls.model_fields.items():
            lookup[_key_token(name)] = field.alias or name
        return {
            lookup.get(_key_token(key), key) if isinstance(key, str) else key: value
            for key, value in data.items()
        }


def _key_token(key: str) -> str:
    return key.replace("_", "").lower()


class TaskTimerEntity(StorageRecord):
    """
    Storage record for one task.

    ``description`` and ``elapsed_seconds`` must be present; a record missing
    either is rejected rather than loaded with a default. ``is_running`` and
    ``start_time`` are part of the document layout but are always written as
    ``false`` / ``null``.
    """

    description: str = Field(alias="Description")
    elapsed_seconds: float = Field(ge=0, alias="ElapsedSeconds")
    is_running: bool = Field(default=False, alias="IsRunning")
    start_time: Optional[datetime] = Field(default=None, alias="StartTime")
    last_modified: datetime = Field(default_factory=datetime.now, alias="LastModified")


class ApplicationStateEntity(StorageRecord):
    """
    The full persisted snapshot: ordered tasks plus metadata.

    Task order is display order and export order.
    """

    tasks: Optional[List[TaskTimerEntity]] = Field(default_factory=list, alias="Tasks")
    saved_at: datetime = Field(default_factory=datetime.now, alias="SavedAt")
    version: str = Field(default=SCHEMA_VERSION, alias="Version")


class UserPreferences(BaseModel):
    """
    User configuration and preferences.

    Loaded from settings.yaml; every field has a working default.
    """
    model_config = ConfigDict(from_attributes=True)

    language: str = Field(default="auto", description="UI language: 'en', 'de', or 'auto' (detect from system)")

    # Timing
    notification_duration_ms: int = Field(default=3000, gt=0, description="How long info messages stay visible")
    clock_interval_ms: int = Field(default=1000, gt=0, description="Display refresh interval")
    adjust_step_minutes: int = Field(default=15, gt=0, description="Step for manual +/- corrections")

    # Display
    delete_label_max_length: int = Field(default=15, ge=2, description="Task name length shown in delete prompts")

    # Export / logging
    export_directory: Optional[str] = Field(default=None, description="Where auto-named exports are written")
    log_level: str = Field(default="INFO", description="Root level for the application logger")
