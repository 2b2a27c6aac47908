"""
Validators for accounts app.
"""

import re
from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _


PHONE_NUMBER_PATTERN = re.compile(r'^\+?[1-9]\d{6,14}$')


def validate_phone_number(value):
    """
    Validate that the value looks like an E.164 phone number.

    Spaces, dashes, dots and parentheses are tolerated and ignored.
    """
    normalized = re.sub(r'[\s\-().]', '', value or '')

    if not PHONE_NUMBER_PATTERN.match(normalized):
        raise ValidationError(
            _('Enter a valid phone number, e.g. +14155550100.'),
            code='invalid_phone_number',
        )
