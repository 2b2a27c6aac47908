"""
Service layer for tasks app.

All business logic for task operations is centralized here.
Views and the scheduled jobs in apps.notifications both call into it.

Services:
- compute_priority: Map a due date to a priority tier (0-3)
- derive_status: Map subtask completion flags to a task status
- create_task / update_task / delete_task: Task lifecycle
- create_subtask / update_subtask / delete_subtask: SubTask lifecycle
- paginate: Offset/limit slicing for list endpoints
"""

import logging
import math
from datetime import date, datetime, time, timedelta

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.utils import timezone

from .models import Task, SubTask

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)

# Largest OFFSET the database backends can bind
MAX_OFFSET = 2 ** 63 - 1


# =============================================================================
# Priority & Status Rules
# =============================================================================

def _as_aware_datetime(value):
    """Normalize a date/datetime to an aware datetime in the current zone."""
    if isinstance(value, datetime):
        if timezone.is_naive(value):
            return timezone.make_aware(value)
        return value

    if isinstance(value, date):
        return timezone.make_aware(datetime.combine(value, time.min))

    raise ValidationError(f"Invalid due date: {value!r}", code='invalid_due_date')


def compute_priority(due_date, now=None):
    """
    Compute the priority tier for a due date.

    days = ceil((due_date - now) / 1 day)
    - days == 0      -> 0 (due today, most urgent)
    - 1 <= days <= 2 -> 1
    - 3 <= days <= 4 -> 2
    - anything else  -> 3

    Overdue dates (days < 0) fall into tier 3, the least urgent tier.
    Existing clients sort on this value, so it is kept as is; overdue
    tasks are escalated by phone instead (see apps.notifications).

    Args:
        due_date: date or datetime (naive values use the current time zone)
        now: Reference time (defaults to timezone.now())

    Raises:
        ValidationError: If due_date is not a date or datetime
    """
    due = _as_aware_datetime(due_date)
    now = _as_aware_datetime(now) if now is not None else timezone.now()

    days_difference = math.ceil((due - now) / ONE_DAY)

    if days_difference == 0:
        return Task.Priority.TODAY
    if 1 <= days_difference <= 2:
        return Task.Priority.SOON
    if 3 <= days_difference <= 4:
        return Task.Priority.UPCOMING
    return Task.Priority.LATER


def _subtask_status(subtask):
    if isinstance(subtask, int):
        return subtask
    if isinstance(subtask, dict):
        return subtask['status']
    return subtask.status


def derive_status(subtasks):
    """
    Derive a task status from its subtasks.

    - no subtasks            -> TODO
    - any incomplete subtask -> IN_PROGRESS
    - all complete           -> DONE

    Accepts SubTask instances, dicts with a 'status' key, or raw 0/1 values.
    """
    statuses = [_subtask_status(subtask) for subtask in subtasks]

    if not statuses:
        return Task.Status.TODO
    if any(status == SubTask.Status.INCOMPLETE for status in statuses):
        return Task.Status.IN_PROGRESS
    return Task.Status.DONE


# =============================================================================
# Task Services
# =============================================================================

def create_task(title, due_date, description='', user=None):
    """
    Create a task with its priority computed from the due date.

    Status always starts as TODO.

    Returns:
        Created Task instance
    """
    if not title or not title.strip():
        raise ValidationError("Task title is required.")

    task = Task.objects.create(
        title=title.strip(),
        description=description.strip() if description else '',
        due_date=due_date,
        priority=compute_priority(due_date),
        status=Task.Status.TODO,
        user=user,
    )
    logger.info(f'Task {task.pk} created with priority {task.priority}')
    return task


def update_task(task, **kwargs):
    """
    Update a task's due date, status and/or owner.

    - due_date: stored and the priority tier recomputed
    - status: stored as given (not re-derived)
    - user: owner for escalation calls (None clears it)

    Only keys present in kwargs are applied. Every update then resets the
    live subtasks: complete when the submitted status is DONE, incomplete
    otherwise (a stored DONE status alone does not count).

    Returns:
        Updated Task instance
    """
    with transaction.atomic():
        if 'due_date' in kwargs:
            task.due_date = kwargs['due_date']
            task.priority = compute_priority(task.due_date)

        if 'status' in kwargs:
            status = kwargs['status']
            if status not in Task.Status.values:
                raise ValidationError(f"Invalid status: {status}")
            task.status = status

        if 'user' in kwargs:
            task.user = kwargs['user']

        task.save()

        subtask_status = (
            SubTask.Status.COMPLETE
            if kwargs.get('status') == Task.Status.DONE
            else SubTask.Status.INCOMPLETE
        )
        task.subtasks.alive().update(status=subtask_status, updated_at=timezone.now())

    logger.info(f'Task {task.pk} updated: {", ".join(sorted(kwargs)) or "no changes"}')
    return task


def delete_task(task):
    """Soft-delete a task and every live subtask under it."""
    with transaction.atomic():
        task.deleted_at = timezone.now()
        task.save(update_fields=['deleted_at', 'updated_at'])
        cascaded = task.subtasks.soft_delete()

    logger.info(f'Task {task.pk} deleted along with {cascaded} subtask(s)')
    return task


# =============================================================================
# SubTask Services
# =============================================================================

def create_subtask(task):
    """Create an incomplete subtask under an existing, live task."""
    if task.is_deleted:
        raise ValidationError("Cannot add a subtask to a deleted task.")

    subtask = SubTask.objects.create(task=task, status=SubTask.Status.INCOMPLETE)
    logger.info(f'SubTask {subtask.pk} created for task {task.pk}')
    return subtask


def refresh_task_status(task):
    """Re-derive and store a task's status from its live subtasks."""
    task.status = derive_status(task.subtasks.alive().only('status'))
    task.save(update_fields=['status', 'updated_at'])
    return task


def update_subtask(subtask, status):
    """
    Set a subtask's completion flag and refresh the parent task's status.

    Returns:
        Updated SubTask instance
    """
    if status not in SubTask.Status.values:
        raise ValidationError(f"Invalid subtask status: {status}")

    with transaction.atomic():
        subtask.status = status
        subtask.save(update_fields=['status', 'updated_at'])
        task = refresh_task_status(subtask.task)

    logger.info(f'SubTask {subtask.pk} set to {status}, task {task.pk} is now {task.status}')
    return subtask


def delete_subtask(subtask):
    """Soft-delete a single subtask. The parent's status is left untouched."""
    subtask.deleted_at = timezone.now()
    subtask.save(update_fields=['deleted_at', 'updated_at'])
    logger.info(f'SubTask {subtask.pk} deleted')
    return subtask


# =============================================================================
# Pagination
# =============================================================================

def _positive_int(value, name, default):
    if value in (None, ''):
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a positive integer.")
    if number < 1:
        raise ValidationError(f"{name} must be a positive integer.")
    return number


def paginate(queryset, page=None, page_size=None):
    """
    Slice a queryset by 1-indexed page number and page size.

    page_size defaults to DEFAULT_PAGE_SIZE and is capped at MAX_PAGE_SIZE.
    Pages past the end yield an empty list; pages beyond what the
    database can address raise ValidationError.

    Returns:
        (items, page, page_size)
    """
    page = _positive_int(page, 'page', 1)
    page_size = min(
        _positive_int(page_size, 'page_size', settings.DEFAULT_PAGE_SIZE),
        settings.MAX_PAGE_SIZE,
    )
    offset = (page - 1) * page_size
    if offset + page_size > MAX_OFFSET:
        raise ValidationError("page is out of range.")
    return list(queryset[offset:offset + page_size]), page, page_size
