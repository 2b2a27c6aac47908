"""
Service layer for notifications app.

Escalation of overdue tasks into outbound phone calls.
"""

import logging

from .backends import get_call_backend

logger = logging.getLogger(__name__)


def place_call(phone_number, backend=None):
    """
    Place one outbound call to `phone_number`.

    Args:
        phone_number: Callee in E.164 format
        backend: Call backend instance (defaults to CALL_BACKEND)

    Returns:
        Provider call identifier
    """
    backend = backend or get_call_backend()
    return backend.place_call(to=phone_number)


def order_for_escalation(tasks):
    """
    Order tasks by their owner's priority, lowest number first.

    The sort is stable, so tasks whose owners share a priority keep
    their incoming (due date) order.
    """
    return sorted(tasks, key=lambda task: task.user.priority)


def escalate_overdue_tasks(tasks, backend=None):
    """
    Call the owner of every overdue task, one call per task.

    Calls are placed sequentially in escalation order. A failed call is
    logged and counted; the remaining calls still go out. There is no
    retry and no dedup, so a task still overdue on the next run is
    called again.

    Args:
        tasks: Iterable of Task instances with `user` loaded
        backend: Call backend instance (defaults to CALL_BACKEND)

    Returns:
        dict with counts: called, failed, skipped
    """
    backend = backend or get_call_backend()
    summary = {'called': 0, 'failed': 0, 'skipped': 0}

    owned = []
    for task in tasks:
        if task.user is None:
            logger.warning(f'Task {task.pk} is overdue but has no owner, skipping call')
            summary['skipped'] += 1
        else:
            owned.append(task)

    for task in order_for_escalation(owned):
        try:
            place_call(task.user.phone_number, backend=backend)
        except Exception:
            logger.exception(f'Voice call failed for task {task.pk} (user {task.user_id})')
            summary['failed'] += 1
            continue

        summary['called'] += 1
        logger.info(
            f'Voice call initiated for task {task.pk}, user with priority {task.user.priority}.'
        )

    return summary
