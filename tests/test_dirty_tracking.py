"""
Tests for the edge-triggered dirty flag.
"""

import pytest

from worktime.services.dirty_tracking_service import DirtyTrackingService


@pytest.fixture
def recorded(dirty_tracker):
    events = []
    dirty_tracker.dirty_state_changed.connect(lambda value: events.append(value))
    return events


def test_starts_clean(dirty_tracker):
    assert dirty_tracker.has_unsaved_changes is False


@pytest.mark.parametrize("mark", [
    "mark_task_created", "mark_task_updated", "mark_task_deleted", "mark_timer_changed",
])
def test_every_mark_sets_dirty(dirty_tracker, recorded, mark):
    getattr(dirty_tracker, mark)()
    assert dirty_tracker.has_unsaved_changes
    assert recorded == [True]


def test_repeated_marks_notify_once(dirty_tracker, recorded):
    for _ in range(7):
        dirty_tracker.mark_task_created()
        dirty_tracker.mark_timer_changed()
    dirty_tracker.mark_saved()
    assert recorded == [True, False]


def test_mark_saved_when_clean_is_silent(dirty_tracker, recorded):
    dirty_tracker.mark_saved()
    assert recorded == []
    assert not dirty_tracker.has_unsaved_changes


def test_dirty_again_after_save(dirty_tracker, recorded):
    dirty_tracker.mark_task_updated()
    dirty_tracker.mark_saved()
    dirty_tracker.mark_task_deleted()
    assert recorded == [True, False, True]


def test_instances_are_independent():
    a, b = DirtyTrackingService(), DirtyTrackingService()
    a.mark_task_created()
    assert not b.has_unsaved_changes
