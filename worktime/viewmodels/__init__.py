"""Presentation layer - view models the window binds to"""

from .task_timer import TaskTimerViewModel, TaskTimerViewModelFactory
from .main import MainViewModel

__all__ = ["TaskTimerViewModel", "TaskTimerViewModelFactory", "MainViewModel"]
