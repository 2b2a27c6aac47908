"""
Priority tiers and status derivation.

Pure functions, no database access.
"""

from datetime import date, datetime, timedelta, timezone as dt_timezone

import pytest
from django.core.exceptions import ValidationError

from apps.tasks.models import Task, SubTask
from apps.tasks.services import compute_priority, derive_status

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=dt_timezone.utc)


# =============================================================================
# compute_priority
# =============================================================================

@pytest.mark.parametrize('offset, expected', [
    (timedelta(0), 0),
    (timedelta(hours=-6), 0),
    (timedelta(hours=1), 1),
    (timedelta(days=1), 1),
    (timedelta(days=2), 1),
    (timedelta(days=2, hours=1), 2),
    (timedelta(days=3), 2),
    (timedelta(days=4), 2),
    (timedelta(days=4, hours=1), 3),
    (timedelta(days=30), 3),
])
def test_priority_tiers_follow_days_until_due(offset, expected):
    assert compute_priority(NOW + offset, now=NOW) == expected


@pytest.mark.parametrize('offset', [
    timedelta(days=-1),
    timedelta(days=-2, hours=-3),
    timedelta(days=-365),
])
def test_overdue_dates_get_least_urgent_tier(offset):
    assert compute_priority(NOW + offset, now=NOW) == Task.Priority.LATER


def test_date_only_due_date_is_midnight_in_current_zone():
    # 2026-10-20 00:00 UTC is 12 hours after NOW
    assert compute_priority(date(2026, 10, 20), now=NOW) == 1
    assert compute_priority(date(2026, 10, 23), now=NOW) == 2


def test_naive_datetimes_are_accepted():
    assert compute_priority(datetime(2026, 10, 22, 12, 0), now=datetime(2026, 10, 19, 12, 0)) == 2


def test_defaults_to_current_time():
    from django.utils import timezone
    assert compute_priority(timezone.now() + timedelta(days=10)) == 3


@pytest.mark.parametrize('bad_value', [None, 'tomorrow', 5, ['2026-10-20']])
def test_invalid_due_date_raises_validation_error(bad_value):
    with pytest.raises(ValidationError):
        compute_priority(bad_value, now=NOW)


# =============================================================================
# derive_status
# =============================================================================

def test_no_subtasks_is_todo():
    assert derive_status([]) == Task.Status.TODO


def test_single_incomplete_subtask_is_in_progress():
    assert derive_status([{'status': 0}]) == Task.Status.IN_PROGRESS


def test_all_complete_is_done():
    assert derive_status([{'status': 1}, {'status': 1}]) == Task.Status.DONE


def test_any_incomplete_is_in_progress():
    assert derive_status([{'status': 1}, {'status': 0}]) == Task.Status.IN_PROGRESS


def test_accepts_model_instances_and_raw_values():
    subtasks = [SubTask(status=SubTask.Status.COMPLETE), SubTask(status=SubTask.Status.COMPLETE)]
    assert derive_status(subtasks) == Task.Status.DONE
    assert derive_status([1, 0]) == Task.Status.IN_PROGRESS
    assert derive_status(iter([1])) == Task.Status.DONE
