"""UI layer - PySide6 GUI components"""

from .app import WorkTimeApp, main
from .main_window import MainWindow

__all__ = ["WorkTimeApp", "main", "MainWindow"]
