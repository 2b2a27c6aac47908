"""
Forms for tasks app.

Validate JSON payloads before they reach the service layer.

Includes:
- TaskCreateForm: title, description, due date and optional owner
- TaskUpdateForm: partial update of due date, status and owner
- SubTaskStatusForm: completion flag of a subtask
"""

from datetime import date

from django import forms

from .models import Task, SubTask
from apps.accounts.models import User


class JsonDateTimeField(forms.DateTimeField):
    """DateTimeField that only parses strings; other JSON values are invalid."""

    def to_python(self, value):
        if value not in self.empty_values and not isinstance(value, (str, date)):
            raise forms.ValidationError(self.error_messages['invalid'], code='invalid')
        return super().to_python(value)


class TaskCreateForm(forms.Form):
    """Payload of POST /api/tasks."""

    title = forms.CharField(max_length=255, error_messages={'required': 'Task title is required.'})
    description = forms.CharField(required=False)
    due_date = JsonDateTimeField(error_messages={'required': 'Due date is required.'})
    user_id = forms.ModelChoiceField(
        queryset=User.objects.all(),
        required=False,
        error_messages={'invalid_choice': 'User not found.'},
    )


class TaskUpdateForm(forms.Form):
    """
    Payload of PUT /api/tasks/<id>.

    Every field is optional; `changed_values()` only returns the keys
    present in the submitted payload.
    """

    due_date = JsonDateTimeField(required=False)
    status = forms.ChoiceField(choices=Task.Status.choices, required=False)
    user_id = forms.ModelChoiceField(
        queryset=User.objects.all(),
        required=False,
        error_messages={'invalid_choice': 'User not found.'},
    )

    def clean_due_date(self):
        due_date = self.cleaned_data.get('due_date')
        if 'due_date' in self.data and due_date is None:
            raise forms.ValidationError('Due date cannot be empty.')
        return due_date

    def clean_status(self):
        status = self.cleaned_data.get('status')
        if 'status' in self.data and not status:
            raise forms.ValidationError('Status cannot be empty.')
        return status

    def changed_values(self):
        """Map submitted fields to update_task() keyword arguments."""
        values = {}
        if 'due_date' in self.data:
            values['due_date'] = self.cleaned_data['due_date']
        if 'status' in self.data:
            values['status'] = self.cleaned_data['status']
        if 'user_id' in self.data:
            values['user'] = self.cleaned_data['user_id']
        return values


class SubTaskStatusForm(forms.Form):
    """Payload of PUT /api/subtasks/<id>."""

    status = forms.TypedChoiceField(
        choices=SubTask.Status.choices,
        coerce=int,
        error_messages={
            'required': 'Status is required.',
            'invalid_choice': 'Invalid status value. Use 0 or 1.',
        },
    )
