"""Domain layer - Pure business entities and logic"""

from .models import TaskTimer, TaskTimerEntity, ApplicationStateEntity, UserPreferences, SCHEMA_VERSION
from .exceptions import PersistenceError, CorruptStateError, StorageIOError

__all__ = [
    "TaskTimer", "TaskTimerEntity", "ApplicationStateEntity", "UserPreferences", "SCHEMA_VERSION",
    "PersistenceError", "CorruptStateError", "StorageIOError",
]
