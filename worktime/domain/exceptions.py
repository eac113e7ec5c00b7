"""
Persistence error taxonomy.

A missing state file is not an error (the repository returns None).
Everything else that goes wrong with durable storage is raised as one of
these, wrapping the original exception as ``__cause__``.
"""

from pathlib import Path
from typing import Optional


class PersistenceError(Exception):
    """Base class for failures while reading or writing durable storage."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class CorruptStateError(PersistenceError):
    """Stored state exists but could not be parsed or validated."""


class StorageIOError(PersistenceError):
    """The file system refused a read or write."""
