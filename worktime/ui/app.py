"""
Application composition - wires services, view models and the window.

Architecture Decision: Presentation Layer
This is the only place that knows every concrete class. Services get their
collaborators through constructors, which keeps them testable in isolation.
"""

import logging
import sys
from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtCore import QTimer

from worktime.i18n import set_language, tr
from worktime.infra.async_runner import AsyncRunner
from worktime.infra.config import get_settings
from worktime.infra.log_setup import setup_logging
from worktime.infra.repository import JsonTaskRepository
from worktime.services import (
    ClockService, DataPersistenceService, DirtyTrackingService,
    NotificationService, ReportService, TimerCoordinationService,
)
from worktime.viewmodels import MainViewModel, TaskTimerViewModelFactory
from .main_window import MainWindow

logger = logging.getLogger(__name__)


class WorkTimeApp:
    """
    Main application object: owns the QApplication, the asyncio loop used for
    persistence, and the single instance of every service.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)

        # Settings, logging, language
        self.settings = get_settings()
        prefs = self.settings.preferences
        setup_logging(self.settings)
        set_language(prefs.language)

        # Event loop for async persistence, stepped from the Qt loop
        self.runner = AsyncRunner()

        # Services
        self.coordinator = TimerCoordinationService()
        self.dirty_tracker = DirtyTrackingService()
        self.notifications = NotificationService(duration_ms=prefs.notification_duration_ms)
        self.clock = ClockService(interval_ms=prefs.clock_interval_ms)
        self.persistence = DataPersistenceService(
            JsonTaskRepository(self.settings.state_file_path),
            ReportService(),
            export_dir=self.settings.export_dir,
        )
        self.factory = TaskTimerViewModelFactory(
            self.coordinator, self.dirty_tracker,
            adjust_step_minutes=prefs.adjust_step_minutes
        )

        # View model
        self.view_model = MainViewModel(
            self.persistence,
            self.notifications,
            self.dirty_tracker,
            self.coordinator,
            self.factory,
            self.clock,
            delete_label_max_length=prefs.delete_label_max_length,
        )

        self.main_window = None

        # Initialize on startup
        QTimer.singleShot(0, self._async_init)

    def _async_init(self):
        """Show the window, then restore saved state in the background"""
        try:
            self.main_window = MainWindow(
                self.view_model, self.runner,
                step_minutes=self.settings.preferences.adjust_step_minutes
            )
            self.main_window.show()
            logger.info("Main window shown")

            if self.view_model.can_restore_state():
                self.runner.submit(self.view_model.load_data())

        except Exception as e:
            logger.exception("Initialization failed")
            QMessageBox.critical(None, tr("error.init_title"),
                                 tr("error.init_message", error=e))
            self.app.quit()

    def run(self) -> int:
        logger.info("=== Work Time Tracker started ===")
        exit_code = self.app.exec()
        self.runner.close()
        return exit_code


def main():
    """Main entry point"""
    app = WorkTimeApp()
    return app.run()
