"""
Admin configuration for tasks app.
"""

from django.contrib import admin
from .models import Task, SubTask
from .services import compute_priority


class SubTaskInline(admin.TabularInline):
    """Inline admin for subtasks on task detail."""
    model = SubTask
    extra = 0
    readonly_fields = ('created_at', 'updated_at', 'deleted_at')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = (
        'id', 'title', 'user', 'status', 'priority', 'due_date',
        'is_overdue_display', 'deleted_at'
    )
    list_filter = ('status', 'priority', 'due_date', 'deleted_at')
    search_fields = ('title', 'description')
    ordering = ('due_date',)
    date_hierarchy = 'due_date'
    raw_id_fields = ('user',)

    readonly_fields = ('priority', 'created_at', 'updated_at', 'deleted_at')

    fieldsets = (
        (None, {
            'fields': ('title', 'description', 'user')
        }),
        ('Status & Priority', {
            'fields': ('status', 'priority', 'due_date')
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at', 'deleted_at'),
            'classes': ('collapse',),
        }),
    )

    inlines = [SubTaskInline]

    @admin.display(boolean=True, description='Overdue')
    def is_overdue_display(self, obj):
        return obj.is_overdue

    def save_model(self, request, obj, form, change):
        obj.priority = compute_priority(obj.due_date)
        super().save_model(request, obj, form, change)


@admin.register(SubTask)
class SubTaskAdmin(admin.ModelAdmin):
    """Admin for SubTask model."""

    list_display = ('id', 'task', 'status', 'created_at', 'deleted_at')
    list_filter = ('status', 'deleted_at')
    raw_id_fields = ('task',)
    readonly_fields = ('created_at', 'updated_at', 'deleted_at')
