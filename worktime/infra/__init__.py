"""Infrastructure layer - Configuration and persistence"""

from .async_runner import AsyncRunner
from .config import Settings, get_settings
from .repository import JsonTaskRepository

__all__ = ["AsyncRunner", "Settings", "get_settings", "JsonTaskRepository"]
