"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
from PySide6.QtCore import QCoreApplication

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from worktime.i18n import set_language
from worktime.infra.config import Settings
from worktime.infra.repository import JsonTaskRepository
from worktime.services import (
    ClockService, DataPersistenceService, DirtyTrackingService,
    NotificationService, ReportService, TimerCoordinationService,
)
from worktime.viewmodels import MainViewModel, TaskTimerViewModelFactory


@pytest.fixture(scope="session", autouse=True)
def qapp():
    """QTimer needs an application instance on the test thread"""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture(autouse=True)
def english():
    set_language("en")


@pytest.fixture
def settings(tmp_path):
    """Settings confined to a temp directory"""
    return Settings(config_dir=tmp_path / "config", data_dir=tmp_path / "data")


@pytest.fixture
def repository(tmp_path):
    return JsonTaskRepository(tmp_path / "state.json")


@pytest.fixture
def persistence(repository, tmp_path):
    return DataPersistenceService(repository, ReportService(), export_dir=tmp_path / "exports")


@pytest.fixture
def coordinator():
    return TimerCoordinationService()


@pytest.fixture
def dirty_tracker():
    return DirtyTrackingService()


@pytest.fixture
def notifications():
    service = NotificationService(duration_ms=50)
    yield service
    service._hide_timer.stop()


@pytest.fixture
def factory(coordinator, dirty_tracker):
    return TaskTimerViewModelFactory(coordinator, dirty_tracker)


@pytest.fixture
def main_vm(persistence, notifications, dirty_tracker, coordinator, factory):
    vm = MainViewModel(
        persistence, notifications, dirty_tracker, coordinator, factory,
        ClockService(interval_ms=1000),
    )
    yield vm
    vm.cleanup()
