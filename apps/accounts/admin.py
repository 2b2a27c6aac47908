"""
Admin configuration for accounts app.
"""

from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin for escalation contacts."""

    list_display = ('id', 'phone_number', 'priority', 'created_at')
    list_filter = ('priority',)
    search_fields = ('phone_number',)
    ordering = ('priority', 'created_at')
    readonly_fields = ('created_at', 'updated_at')
