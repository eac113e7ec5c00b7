"""
Main Window - task list with per-row timer controls.

Architecture Decision: Presentation Layer
This layer only renders view-model state and forwards commands. Persistence
coroutines are scheduled on the application's AsyncRunner and never
block the window.
"""

from typing import Dict
from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLineEdit,
    QLabel, QPushButton, QScrollArea
)
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QFont, QShortcut, QKeySequence

from worktime.i18n import tr
from worktime.infra.async_runner import AsyncRunner
from worktime.services.notification_service import NotificationState
from worktime.viewmodels import MainViewModel, TaskTimerViewModel


class TaskRowWidget(QWidget):
    """One task: description, elapsed time, start/stop, +/- step, delete"""

    def __init__(self, vm: TaskTimerViewModel, main_vm: MainViewModel,
                 step_minutes: int, parent=None):
        super().__init__(parent)
        self.vm = vm
        self.main_vm = main_vm
        self.step_minutes = step_minutes

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 2, 4, 2)
        layout.setSpacing(6)

        self.description_input = QLineEdit(vm.description)
        self.description_input.setPlaceholderText(tr("main.description_placeholder"))
        # Typing is transient; focus-out / Enter commits
        self.description_input.textEdited.connect(self._on_text_edited)
        self.description_input.editingFinished.connect(lambda: self.main_vm.commit_description(self.vm))
        layout.addWidget(self.description_input, stretch=3)

        self.elapsed_label = QLabel(vm.elapsed_formatted)
        elapsed_font = QFont()
        elapsed_font.setBold(True)
        self.elapsed_label.setFont(elapsed_font)
        self.elapsed_label.setMinimumWidth(70)
        self.elapsed_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.elapsed_label)

        self.toggle_btn = QPushButton()
        self.toggle_btn.clicked.connect(self._toggle)
        layout.addWidget(self.toggle_btn)

        self.minus_btn = QPushButton(tr("main.subtract_minutes", minutes=step_minutes))
        self.minus_btn.clicked.connect(lambda: self.main_vm.adjust_task(self.vm, -self.step_minutes))
        layout.addWidget(self.minus_btn)

        self.plus_btn = QPushButton(tr("main.add_minutes", minutes=step_minutes))
        self.plus_btn.clicked.connect(lambda: self.main_vm.adjust_task(self.vm, self.step_minutes))
        layout.addWidget(self.plus_btn)

        self.delete_btn = QPushButton(tr("main.delete"))
        self.delete_btn.clicked.connect(lambda: self.main_vm.remove_task(self.vm))
        layout.addWidget(self.delete_btn)

        vm.elapsed_changed.connect(self.elapsed_label.setText)
        vm.running_changed.connect(self._on_running_changed)
        self._on_running_changed(vm.is_running)

    def _on_text_edited(self, text: str):
        self.vm.description = text

    def _toggle(self):
        if self.vm.is_running:
            self.main_vm.stop_task(self.vm)
        else:
            self.main_vm.start_task(self.vm)

    def _on_running_changed(self, running: bool):
        self.toggle_btn.setText(tr("main.stop") if running else tr("main.start"))
        self.elapsed_label.setText(self.vm.elapsed_formatted)


class MainWindow(QMainWindow):
    """
    Task list window.

    Closing the window saves the current state and tears the view model down.
    """

    closed = Signal()

    def __init__(self, view_model: MainViewModel, runner: AsyncRunner,
                 step_minutes: int = 15, parent=None):
        super().__init__(parent)
        self.view_model = view_model
        self.runner = runner
        self.step_minutes = step_minutes
        self.rows: Dict[str, TaskRowWidget] = {}

        self.setWindowTitle(tr("main.title"))
        self.setMinimumWidth(560)

        self._setup_ui()
        self._connect_signals()
        self._rebuild_rows()
        self._setup_shortcuts()

    def _setup_ui(self):
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        layout = QVBoxLayout(central_widget)

        # Header: clock and unsaved indicator
        header = QHBoxLayout()
        self.clock_label = QLabel(f"{self.view_model.current_date}  {self.view_model.current_time}")
        header.addWidget(self.clock_label)
        header.addStretch()
        self.unsaved_label = QLabel(tr("main.unsaved"))
        self.unsaved_label.setVisible(self.view_model.has_unsaved_changes)
        header.addWidget(self.unsaved_label)
        layout.addLayout(header)

        # Task rows
        self.rows_container = QWidget()
        self.rows_layout = QVBoxLayout(self.rows_container)
        self.rows_layout.setAlignment(Qt.AlignTop)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.rows_container)
        layout.addWidget(scroll, stretch=1)

        # Notification bar
        notification_bar = QHBoxLayout()
        self.message_label = QLabel("")
        notification_bar.addWidget(self.message_label, stretch=1)
        self.confirm_btn = QPushButton(tr("main.confirm"))
        self.confirm_btn.clicked.connect(self.view_model.confirm)
        notification_bar.addWidget(self.confirm_btn)
        self.cancel_btn = QPushButton(tr("main.cancel"))
        self.cancel_btn.clicked.connect(self.view_model.cancel)
        notification_bar.addWidget(self.cancel_btn)
        layout.addLayout(notification_bar)
        self._on_notification_state(self.view_model.notifications.state)

        # Footer: total and list commands
        footer = QHBoxLayout()
        self.total_label = QLabel(self.view_model.total_time_formatted)
        total_font = QFont()
        total_font.setBold(True)
        self.total_label.setFont(total_font)
        footer.addWidget(self.total_label)
        footer.addStretch()

        for key, handler in (
            ("main.add_task", self.view_model.add_task),
            ("main.reset_all", self.view_model.clear_all_timers),
            ("main.export", lambda: self._run(self.view_model.export_data())),
            ("main.save", lambda: self._run(self.view_model.save_application_state())),
            ("main.load", lambda: self._run(self.view_model.load_data())),
        ):
            button = QPushButton(tr(key))
            button.clicked.connect(lambda _=False, h=handler: h())
            footer.addWidget(button)
        layout.addLayout(footer)

    def _connect_signals(self):
        """Connect view-model signals to UI updates"""
        self.view_model.tasks_changed.connect(self._rebuild_rows)
        self.view_model.total_changed.connect(self.total_label.setText)
        self.view_model.clock_tick.connect(self._on_clock_tick)
        self.view_model.dirty_tracker.dirty_state_changed.connect(self.unsaved_label.setVisible)
        self.view_model.notifications.state_changed.connect(self._on_notification_state)
        self.view_model.notifications.message_changed.connect(self.message_label.setText)

    def _setup_shortcuts(self):
        """Setup keyboard shortcuts"""
        add_shortcut = QShortcut(QKeySequence("Ctrl+N"), self)
        add_shortcut.activated.connect(self.view_model.add_task)

        save_shortcut = QShortcut(QKeySequence("Ctrl+S"), self)
        save_shortcut.activated.connect(lambda: self._run(self.view_model.save_application_state()))

    def _run(self, coro):
        """Schedule a view-model coroutine; its result arrives as signals"""
        return self.runner.submit(coro)

    def _rebuild_rows(self):
        current = {vm.handle_id for vm in self.view_model.tasks}
        for handle_id in list(self.rows):
            if handle_id not in current:
                row = self.rows.pop(handle_id)
                self.rows_layout.removeWidget(row)
                row.deleteLater()

        for index, vm in enumerate(self.view_model.tasks):
            row = self.rows.get(vm.handle_id)
            if row is None:
                row = TaskRowWidget(vm, self.view_model, self.step_minutes)
                self.rows[vm.handle_id] = row
            self.rows_layout.insertWidget(index, row)

    def _on_clock_tick(self, current_time: str, current_date: str):
        self.clock_label.setText(f"{current_date}  {current_time}")

    def _on_notification_state(self, state: NotificationState):
        confirming = state is NotificationState.SHOWING_CONFIRM
        self.confirm_btn.setVisible(confirming)
        self.cancel_btn.setVisible(confirming)
        self.message_label.setVisible(state is not NotificationState.IDLE)

    def closeEvent(self, event):
        """Save on exit, then release timers and the clock"""
        self.runner.run_until_complete(self.view_model.save_on_exit())
        self.view_model.cleanup()
        self.closed.emit()
        event.accept()
