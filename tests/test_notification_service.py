"""
Tests for the notification / confirmation state machine.
"""

import time
import pytest
from PySide6.QtTest import QTest

from worktime.services.notification_service import NotificationService, NotificationState


def wait_until(predicate, timeout_ms=2000):
    """Process Qt events until predicate() holds or the timeout expires"""
    deadline = time.monotonic() + timeout_ms / 1000
    while not predicate() and time.monotonic() < deadline:
        QTest.qWait(10)
    return predicate()


def test_starts_idle(notifications):
    assert notifications.state is NotificationState.IDLE
    assert notifications.current_message is None
    assert not notifications.is_hide_pending()


def test_show_notification_enters_info_and_schedules_hide(notifications):
    notifications.show_notification("Task added.")
    assert notifications.state is NotificationState.SHOWING_INFO
    assert notifications.current_notification_message == "Task added."
    assert notifications.current_confirmation_message is None
    assert notifications.is_hide_pending()


def test_notification_hides_itself(notifications):
    visibility = []
    notifications.notification_visibility_changed.connect(lambda v: visibility.append(v))

    notifications.show_notification("Saved")
    assert wait_until(lambda: notifications.state is NotificationState.IDLE)
    assert notifications.current_message is None
    assert visibility == [True, False]


def test_new_notification_restarts_hide_timer():
    service = NotificationService(duration_ms=10_000)
    service.show_notification("first")
    service.show_notification("second")
    assert service.current_notification_message == "second"
    assert service.is_hide_pending()
    assert service._hide_timer.remainingTime() > 9_000
    service._hide_timer.stop()


def test_superseded_hide_does_not_hide_newer_message():
    service = NotificationService(duration_ms=300)
    service.show_notification("first")
    QTest.qWait(200)
    service.show_notification("second")
    QTest.qWait(200)
    # First message's deadline has passed; the second must still be visible
    assert service.state is NotificationState.SHOWING_INFO
    assert service.current_message == "second"
    assert wait_until(lambda: service.state is NotificationState.IDLE)


def test_confirmation_suppresses_info_and_cancels_hide(notifications):
    notifications.show_notification("info")
    notifications.show_confirmation("Delete?", on_confirm=lambda: None)
    assert notifications.state is NotificationState.SHOWING_CONFIRM
    assert notifications.current_confirmation_message == "Delete?"
    assert notifications.current_notification_message is None
    assert not notifications.is_hide_pending()
    QTest.qWait(100)
    assert notifications.state is NotificationState.SHOWING_CONFIRM


def test_confirm_runs_callback_then_goes_idle(notifications):
    calls = []
    notifications.show_confirmation("Sure?", on_confirm=lambda: calls.append("yes"),
                                    on_cancel=lambda: calls.append("no"))
    notifications.confirm()
    assert calls == ["yes"]
    assert notifications.state is NotificationState.IDLE
    assert not notifications.has_pending_confirmation


def test_cancel_runs_cancel_callback(notifications):
    calls = []
    notifications.show_confirmation("Sure?", on_confirm=lambda: calls.append("yes"),
                                    on_cancel=lambda: calls.append("no"))
    notifications.cancel()
    assert calls == ["no"]
    assert notifications.state is NotificationState.IDLE


def test_cancel_without_cancel_callback(notifications):
    notifications.show_confirmation("Sure?", on_confirm=lambda: None)
    notifications.clear_confirmation()
    assert notifications.state is NotificationState.IDLE


def test_callbacks_run_at_most_once(notifications):
    calls = []
    notifications.show_confirmation("Sure?", on_confirm=lambda: calls.append("yes"))
    notifications.confirm()
    notifications.confirm()
    notifications.cancel()
    assert calls == ["yes"]


@pytest.mark.parametrize("resolve", ["confirm", "cancel"])
def test_replaced_confirmation_is_never_invoked(notifications, resolve):
    calls = []
    notifications.show_confirmation("A", on_confirm=lambda: calls.append("A-yes"),
                                    on_cancel=lambda: calls.append("A-no"))
    notifications.show_confirmation("B", on_confirm=lambda: calls.append("B-yes"),
                                    on_cancel=lambda: calls.append("B-no"))
    assert notifications.current_confirmation_message == "B"

    getattr(notifications, resolve)()

    assert not any(c.startswith("A") for c in calls)
    assert calls == ["B-yes" if resolve == "confirm" else "B-no"]


def test_info_discards_pending_confirmation(notifications):
    calls = []
    notifications.show_confirmation("Sure?", on_confirm=lambda: calls.append("yes"),
                                    on_cancel=lambda: calls.append("no"))
    notifications.show_notification("something else")
    notifications.confirm()
    notifications.cancel()
    assert calls == []
    assert notifications.state is NotificationState.SHOWING_INFO


def test_message_shown_by_confirm_callback_survives(notifications):
    notifications.show_confirmation(
        "Delete?", on_confirm=lambda: notifications.show_notification("Task deleted.")
    )
    notifications.confirm()
    assert notifications.state is NotificationState.SHOWING_INFO
    assert notifications.current_message == "Task deleted."
    assert notifications.is_hide_pending()


def test_confirmation_requested_from_callback_stays_pending(notifications):
    calls = []
    notifications.show_confirmation(
        "First?",
        on_confirm=lambda: notifications.show_confirmation("Second?", lambda: calls.append(2)),
    )
    notifications.confirm()
    assert notifications.current_confirmation_message == "Second?"
    notifications.confirm()
    assert calls == [2]
    assert notifications.state is NotificationState.IDLE


def test_state_returns_to_idle_when_callback_raises(notifications):
    def boom():
        raise RuntimeError("callback failed")

    notifications.show_confirmation("Sure?", on_confirm=boom)
    with pytest.raises(RuntimeError):
        notifications.confirm()
    assert notifications.state is NotificationState.IDLE


def test_visibility_signals_track_transitions(notifications):
    events = []
    notifications.notification_visibility_changed.connect(lambda v: events.append(("info", v)))
    notifications.confirmation_visibility_changed.connect(lambda v: events.append(("confirm", v)))

    notifications.show_notification("hi")
    notifications.show_confirmation("ok?", on_confirm=lambda: None)
    notifications.confirm()

    assert events == [
        ("info", True),
        ("info", False),
        ("confirm", True),
        ("confirm", False),
    ]
