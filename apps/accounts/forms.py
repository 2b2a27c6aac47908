"""
Forms for accounts app.

Used to validate JSON payloads, not rendered as HTML.
"""

import re
from django import forms

from .models import User


class UserForm(forms.ModelForm):
    """Validate a new User: phone number and priority are both required."""

    class Meta:
        model = User
        fields = ['phone_number', 'priority']
        error_messages = {
            'phone_number': {'required': 'Phone number is required.'},
            'priority': {
                'required': 'Priority is required.',
                'invalid_choice': 'Invalid priority value. Use 0, 1 or 2.',
            },
        }

    def clean_phone_number(self):
        """Store the number without formatting characters."""
        phone_number = self.cleaned_data.get('phone_number', '')
        return re.sub(r'[\s\-().]', '', phone_number)
