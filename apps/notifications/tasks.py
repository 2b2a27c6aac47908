"""
Scheduled tasks for notifications app.

Background jobs run by the Django-Q2 cluster (see setup_schedules):
- Daily priority refresh (midnight)
- Overdue task calls (hourly)

Jobs never raise: failures are logged and reflected in the returned
summary, which Django-Q2 stores as the task result.
"""

import logging

from django.utils import timezone

from apps.tasks.models import Task
from apps.tasks.services import compute_priority
from .services import escalate_overdue_tasks

logger = logging.getLogger(__name__)


def refresh_task_priorities(now=None):
    """
    Scheduled job to run daily at 00:00.

    Recomputes the priority tier of every non-deleted task against a
    single reference time. One task failing to save does not stop the
    rest of the batch.
    """
    now = now or timezone.now()
    summary = {'checked': 0, 'updated': 0, 'failed': 0}

    try:
        tasks = Task.objects.alive().iterator()

        for task in tasks:
            summary['checked'] += 1
            try:
                priority = compute_priority(task.due_date, now=now)
                if priority != task.priority:
                    task.priority = priority
                    task.save(update_fields=['priority', 'updated_at'])
                    summary['updated'] += 1
            except Exception:
                logger.exception(f'Priority refresh failed for task {task.pk}')
                summary['failed'] += 1
    except Exception:
        logger.exception('Error in priority refresh job')
        return summary

    logger.info(
        f'Priority refresh executed: {summary["checked"]} checked, '
        f'{summary["updated"]} updated, {summary["failed"]} failed.'
    )
    return summary


def call_overdue_task_owners(now=None):
    """
    Scheduled job to run hourly.

    Finds live TODO tasks whose due date has passed and phones each
    task's owner, lowest user priority first.
    """
    now = now or timezone.now()

    try:
        overdue_tasks = list(
            Task.objects.alive()
            .filter(status=Task.Status.TODO, due_date__lt=now)
            .select_related('user')
            .order_by('due_date', 'id')
        )
        summary = escalate_overdue_tasks(overdue_tasks)
    except Exception:
        logger.exception('Error in voice call job')
        return {'called': 0, 'failed': 0, 'skipped': 0, 'error': True}

    logger.info(
        f'Voice call job executed: {summary["called"]} called, '
        f'{summary["failed"]} failed, {summary["skipped"]} skipped.'
    )
    return summary
