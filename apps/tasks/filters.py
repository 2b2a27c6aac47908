"""
Task filters using django-filter.

Provides filtering for the list endpoints:
- TaskFilter: priority, due date (calendar day), status, deleted
- SubTaskFilter: task id, deleted

Soft-deleted rows are included unless `deleted` is given.
"""

import django_filters

from .models import Task, SubTask


class SoftDeleteFilterMixin(django_filters.FilterSet):
    """Adds a `deleted` boolean filter: true for deleted rows, false for live ones."""

    deleted = django_filters.BooleanFilter(
        method='filter_deleted',
        label='Deleted'
    )

    def filter_deleted(self, queryset, name, value):
        return queryset.deleted() if value else queryset.alive()


class TaskFilter(SoftDeleteFilterMixin):
    """
    Task list filter.

    Usage in views:
        filterset = TaskFilter(params, queryset=Task.objects.all())
        tasks = filterset.qs
    """

    priority = django_filters.TypedChoiceFilter(
        choices=Task.Priority.choices,
        coerce=int,
        label='Priority'
    )

    status = django_filters.ChoiceFilter(
        choices=Task.Status.choices,
        label='Status'
    )

    # Matches the calendar day of due_date in the current time zone
    due_date = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='date',
        label='Due Date'
    )

    class Meta:
        model = Task
        fields = ['priority', 'status', 'due_date', 'deleted']


class SubTaskFilter(SoftDeleteFilterMixin):
    """SubTask list filter."""

    task_id = django_filters.NumberFilter(
        field_name='task_id',
        label='Task'
    )

    class Meta:
        model = SubTask
        fields = ['task_id', 'deleted']
