"""
User model for task_escalator.

A User is the person who owns tasks and receives escalation calls.
It is not a login account: API clients authenticate with bearer tokens
and admin staff use django.contrib.auth.
"""

from django.db import models

from .validators import validate_phone_number


class User(models.Model):
    """
    Escalation contact.

    Priority is a coarse 0-2 scale, independent of Task priority tiers.
    Lower numbers are called first when overdue tasks are escalated.
    """

    class Priority(models.IntegerChoices):
        FIRST = 0, 'First'
        SECOND = 1, 'Second'
        THIRD = 2, 'Third'

    phone_number = models.CharField(
        max_length=20,
        validators=[validate_phone_number],
        help_text='Number dialled for escalation calls (E.164, e.g. +14155550100)'
    )
    priority = models.PositiveSmallIntegerField(
        choices=Priority.choices,
        db_index=True,
        help_text='Call order for escalations, 0 is called first'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'user'
        verbose_name_plural = 'users'
        ordering = ['priority', 'created_at']

    def __str__(self):
        return f"{self.phone_number} (priority {self.priority})"
