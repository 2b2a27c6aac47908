"""
Scheduled jobs, escalation dispatcher and call backends.
"""

from datetime import timedelta
from io import StringIO
from unittest import mock

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.utils import timezone
from django_q.models import Schedule

from apps.notifications import backends
from apps.notifications.backends import TwilioCallBackend, get_call_backend
from apps.notifications.services import escalate_overdue_tasks, order_for_escalation
from apps.notifications.tasks import call_overdue_task_owners, refresh_task_priorities
from apps.tasks.models import Task

pytestmark = pytest.mark.django_db


def called_numbers():
    return [call['to'] for call in backends.outbox]


# =============================================================================
# Daily priority refresh
# =============================================================================

def test_refresh_recomputes_stale_priorities(make_task):
    now = timezone.now()
    stale = make_task(title='stale', due_date=now + timedelta(days=1), priority=3)
    fresh = make_task(title='fresh', due_date=now + timedelta(days=10), priority=3)

    summary = refresh_task_priorities(now=now)

    stale.refresh_from_db()
    fresh.refresh_from_db()
    assert stale.priority == 1
    assert fresh.priority == 3
    assert summary == {'checked': 2, 'updated': 1, 'failed': 0}


def test_refresh_twice_gives_identical_tiers(make_task):
    now = timezone.now()
    for days in (0, 1, 3, 6, -2):
        make_task(due_date=now + timedelta(days=days, hours=1), priority=3)

    refresh_task_priorities(now=now)
    first = list(Task.objects.order_by('id').values_list('priority', flat=True))
    second_summary = refresh_task_priorities(now=now)
    second = list(Task.objects.order_by('id').values_list('priority', flat=True))

    assert first == second
    assert second_summary['updated'] == 0


def test_refresh_skips_deleted_tasks(make_task):
    now = timezone.now()
    deleted = make_task(due_date=now + timedelta(days=1), priority=3, deleted_at=now)

    summary = refresh_task_priorities(now=now)

    deleted.refresh_from_db()
    assert deleted.priority == 3
    assert summary['checked'] == 0


def test_refresh_continues_after_a_failing_task(make_task):
    now = timezone.now()
    broken = make_task(title='broken', due_date=now + timedelta(days=1), priority=3)
    healthy = make_task(title='healthy', due_date=now + timedelta(days=2), priority=3)

    from apps.tasks.services import compute_priority

    def flaky(due_date, now=None):
        if due_date == broken.due_date:
            raise RuntimeError('boom')
        return compute_priority(due_date, now=now)

    with mock.patch('apps.notifications.tasks.compute_priority', side_effect=flaky):
        summary = refresh_task_priorities(now=now)

    healthy.refresh_from_db()
    assert healthy.priority == 1
    assert summary == {'checked': 2, 'updated': 1, 'failed': 1}


# =============================================================================
# Hourly overdue calls
# =============================================================================

def test_overdue_calls_follow_user_priority(make_user, make_task):
    low = make_user(priority=2, phone_number='+15550000002')
    high = make_user(priority=0, phone_number='+15550000000')
    mid = make_user(priority=1, phone_number='+15550000001')
    for user in (low, high, mid):
        make_task(user=user, due_in=timedelta(hours=-3))

    summary = call_overdue_task_owners()

    assert called_numbers() == ['+15550000000', '+15550000001', '+15550000002']
    assert summary == {'called': 3, 'failed': 0, 'skipped': 0}


def test_only_overdue_todo_tasks_are_called(make_user, make_task):
    user = make_user(phone_number='+15551112222')
    now = timezone.now()
    make_task(title='overdue', user=user, due_in=timedelta(days=-1))
    make_task(title='in progress', user=user, due_in=timedelta(days=-1), status=Task.Status.IN_PROGRESS)
    make_task(title='done', user=user, due_in=timedelta(days=-1), status=Task.Status.DONE)
    make_task(title='future', user=user, due_in=timedelta(days=1))
    make_task(title='deleted', user=user, due_in=timedelta(days=-1), deleted_at=now)

    summary = call_overdue_task_owners(now=now)

    assert called_numbers() == ['+15551112222']
    assert summary['called'] == 1


def test_ownerless_overdue_tasks_are_skipped(make_user, make_task):
    make_task(title='orphan', due_in=timedelta(days=-1))
    make_task(title='owned', user=make_user(phone_number='+15553334444'), due_in=timedelta(days=-1))

    summary = call_overdue_task_owners()

    assert called_numbers() == ['+15553334444']
    assert summary == {'called': 1, 'failed': 0, 'skipped': 1}


def test_repeated_runs_call_again(make_user, make_task):
    make_task(user=make_user(), due_in=timedelta(days=-1))

    call_overdue_task_owners()
    call_overdue_task_owners()

    assert len(backends.outbox) == 2


def test_failed_call_does_not_block_later_calls(make_user, make_task):
    first = make_task(user=make_user(priority=0, phone_number='+15550000000'), due_in=timedelta(days=-1))
    second = make_task(user=make_user(priority=1, phone_number='+15550000001'), due_in=timedelta(days=-1))

    class FlakyBackend(backends.BaseCallBackend):
        def __init__(self):
            self.dialled = []

        def place_call(self, to, from_=None):
            self.dialled.append(to)
            if to == '+15550000000':
                raise ConnectionError('carrier unavailable')
            return 'ok'

    backend = FlakyBackend()
    summary = escalate_overdue_tasks([second, first], backend=backend)

    assert backend.dialled == ['+15550000000', '+15550000001']
    assert summary == {'called': 1, 'failed': 1, 'skipped': 0}


def test_call_job_survives_backend_misconfiguration(make_user, make_task, settings):
    settings.CALL_BACKEND = 'apps.notifications.backends.DoesNotExist'
    make_task(user=make_user(), due_in=timedelta(days=-1))

    summary = call_overdue_task_owners()

    assert summary['error'] is True
    assert summary['called'] == 0


def test_escalation_order_is_stable_for_equal_priorities(make_user):
    user_a = make_user(priority=1)
    user_b = make_user(priority=0)
    tasks = [
        Task(title='a1', user=user_a),
        Task(title='b1', user=user_b),
        Task(title='a2', user=user_a),
    ]

    assert [task.title for task in order_for_escalation(tasks)] == ['b1', 'a1', 'a2']


# =============================================================================
# Call backends
# =============================================================================

def test_twilio_backend_places_voice_call(settings):
    settings.TWILIO_ACCOUNT_SID = 'AC123'
    settings.TWILIO_AUTH_TOKEN = 'secret'
    settings.TWILIO_PHONE_NUMBER = '+15550009999'

    with mock.patch('twilio.rest.Client') as client_class:
        client_class.return_value.calls.create.return_value.sid = 'CA42'
        sid = TwilioCallBackend().place_call('+15550001111')

    client_class.assert_called_once_with('AC123', 'secret')
    client_class.return_value.calls.create.assert_called_once_with(
        url=settings.TWILIO_VOICE_URL,
        from_='+15550009999',
        to='+15550001111',
    )
    assert sid == 'CA42'


def test_twilio_backend_requires_credentials(settings):
    settings.TWILIO_ACCOUNT_SID = ''
    settings.TWILIO_AUTH_TOKEN = ''

    with pytest.raises(ImproperlyConfigured):
        TwilioCallBackend().place_call('+15550001111')


def test_get_call_backend_uses_setting(settings):
    settings.CALL_BACKEND = 'apps.notifications.backends.ConsoleCallBackend'
    assert isinstance(get_call_backend(), backends.ConsoleCallBackend)


# =============================================================================
# Schedules
# =============================================================================

def test_setup_schedules_is_idempotent():
    call_command('setup_schedules', stdout=StringIO())
    call_command('setup_schedules', stdout=StringIO())

    schedules = {schedule.name: schedule for schedule in Schedule.objects.all()}
    assert set(schedules) == {'Daily Priority Refresh', 'Overdue Task Calls'}
    assert schedules['Daily Priority Refresh'].cron == '0 0 * * *'
    assert schedules['Daily Priority Refresh'].func == 'apps.notifications.tasks.refresh_task_priorities'
    assert schedules['Overdue Task Calls'].cron == '0 * * * *'
    assert schedules['Overdue Task Calls'].func == 'apps.notifications.tasks.call_overdue_task_owners'
