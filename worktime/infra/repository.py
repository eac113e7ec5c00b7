"""
Repository Pattern Implementation.

Architecture Decision: Why Repository Pattern?
Separates data access logic from business logic. The persistence service only
sees "save this state", "load the state", "write this text", so the JSON file
could be swapped for a database without touching it.

All file work happens on a worker thread (``asyncio.to_thread``) so the
Qt thread never blocks on disk.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from worktime.domain.models import ApplicationStateEntity
from worktime.domain.exceptions import CorruptStateError, StorageIOError
from worktime.infra.config import get_settings

logger = logging.getLogger(__name__)


class JsonTaskRepository:
    """
    Stores the application state as a single indented JSON document.
    """

    def __init__(self, state_file: Optional[Path] = None):
        if state_file is None:
            state_file = get_settings().state_file_path
        self.state_file = Path(state_file)

    async def save_state(self, state: ApplicationStateEntity) -> None:
        """Replace the stored document with ``state``"""
        content = state.model_dump_json(by_alias=True, indent=2)
        try:
            await asyncio.to_thread(self._write_text, self.state_file, content)
        except OSError as e:
            raise StorageIOError(
                f"Failed to save application state to {self.state_file}: {e}",
                path=self.state_file
            ) from e
        logger.info(f"Saved {len(state.tasks or [])} task(s) to {self.state_file}")

    async def load_state(self) -> Optional[ApplicationStateEntity]:
        """
        Read the stored document.

        Returns:
            The parsed state, or None if nothing has been saved yet

        Raises:
            CorruptStateError: The file exists but is not a valid state document
            StorageIOError: The file could not be read
        """
        try:
            raw = await asyncio.to_thread(self._read_bytes, self.state_file)
        except FileNotFoundError:
            logger.info(f"No saved state at {self.state_file}")
            return None
        except OSError as e:
            raise StorageIOError(
                f"Failed to load application state from {self.state_file}: {e}",
                path=self.state_file
            ) from e

        try:
            data = json.loads(raw.decode('utf-8-sig'))
            if data is None:
                logger.info(f"Saved state at {self.state_file} is empty")
                return None
            state = ApplicationStateEntity.model_validate(data)
        except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
            raise CorruptStateError(
                f"Saved state in {self.state_file} is corrupt: {e}",
                path=self.state_file
            ) from e

        logger.info(f"Loaded state saved at {state.saved_at} (version {state.version})")
        return state

    async def export_to_text(self, content: str, file_path: Path) -> Path:
        """Write a rendered report, creating parent directories as needed"""
        file_path = Path(file_path)
        try:
            await asyncio.to_thread(self._write_text, file_path, content)
        except OSError as e:
            raise StorageIOError(
                f"Failed to export tasks to {file_path}: {e}",
                path=file_path
            ) from e
        logger.info(f"Exported report to {file_path}")
        return file_path

    def has_saved_state(self) -> bool:
        """Existence check only; the file is not parsed"""
        return self.state_file.exists()

    @staticmethod
    def _read_bytes(path: Path) -> bytes:
        with open(path, 'rb') as f:
            return f.read()

    @staticmethod
    def _write_text(path: Path, content: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(content)
