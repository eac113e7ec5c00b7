import sys
from datetime import timedelta
from pathlib import Path
from typing import Union


def get_resource_path(relative_path: str) -> Path:
    """
    Get absolute path to resource, works for dev and for PyInstaller.

    Args:
        relative_path: Relative path from project root (e.g., "worktime/resources/templates")

    Returns:
        Absolute Path object
    """
    if hasattr(sys, '_MEIPASS'):
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = Path(sys._MEIPASS)
    else:
        # This file is in worktime/utils.py, so project root is up two levels
        base_path = Path(__file__).parent.parent.absolute()

    return base_path / relative_path


def format_duration(value: Union[int, float, timedelta]) -> str:
    """Format a duration as HH:MM:SS (hours are not wrapped at 24)"""
    if isinstance(value, timedelta):
        value = value.total_seconds()
    total = max(0, int(value))
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
