"""
Task management models.

Models:
- Task: Work item with a due-date driven priority tier and derived status
- SubTask: Completion checkpoint belonging to a Task

Both models are soft-deleted: `deleted_at` is stamped instead of removing
the row.
"""

from django.db import models
from django.utils import timezone


class SoftDeleteQuerySet(models.QuerySet):
    """QuerySet helpers for soft-deleted rows."""

    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        return self.filter(deleted_at__isnull=False)

    def soft_delete(self):
        """Stamp deleted_at on every live row in the queryset."""
        now = timezone.now()
        return self.alive().update(deleted_at=now, updated_at=now)


class Task(models.Model):
    """
    Main Task model.

    Priority tiers (see services.compute_priority):
    - 0: due today
    - 1: due in 1-2 days
    - 2: due in 3-4 days
    - 3: due in 5+ days, or already overdue

    Status is TODO on creation and is re-derived from subtasks whenever
    a subtask's completion flag changes.
    """

    class Status(models.TextChoices):
        TODO = 'TODO', 'To Do'
        IN_PROGRESS = 'IN_PROGRESS', 'In Progress'
        DONE = 'DONE', 'Done'

    class Priority(models.IntegerChoices):
        TODAY = 0, 'Due today'
        SOON = 1, 'Due in 1-2 days'
        UPCOMING = 2, 'Due in 3-4 days'
        LATER = 3, 'Due later'

    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    due_date = models.DateTimeField(db_index=True)

    priority = models.PositiveSmallIntegerField(
        choices=Priority.choices,
        default=Priority.LATER,
        db_index=True,
        help_text='Recomputed from due_date on save and by the daily refresh job'
    )
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.TODO,
        db_index=True,
    )

    # Owner called when the task goes overdue
    user = models.ForeignKey(
        'accounts.User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='tasks',
        help_text='Escalation contact for this task'
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['due_date', 'id']
        indexes = [
            models.Index(fields=['status', 'due_date'], name='tasks_task_status_2b8e52_idx'),
            models.Index(fields=['priority', 'due_date'], name='tasks_task_priorit_5c1f0a_idx'),
        ]

    def __str__(self):
        return f"#{self.pk}: {self.title}"

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    @property
    def is_overdue(self):
        """Check if task is past its due date and still untouched."""
        return self.status == self.Status.TODO and self.due_date < timezone.now()


class SubTask(models.Model):
    """
    Completion checkpoint of a Task.

    Status is numeric: 0 incomplete, 1 complete.
    """

    class Status(models.IntegerChoices):
        INCOMPLETE = 0, 'Incomplete'
        COMPLETE = 1, 'Complete'

    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='subtasks',
    )
    status = models.PositiveSmallIntegerField(
        choices=Status.choices,
        default=Status.INCOMPLETE,
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    deleted_at = models.DateTimeField(null=True, blank=True, db_index=True)

    objects = SoftDeleteQuerySet.as_manager()

    class Meta:
        verbose_name = 'subtask'
        verbose_name_plural = 'subtasks'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['task', 'deleted_at'], name='tasks_subta_task_id_8d3e71_idx'),
        ]

    def __str__(self):
        return f"SubTask #{self.pk} of task #{self.task_id}"
