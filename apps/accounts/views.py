"""
Views for accounts app.

Includes:
- User creation (open, no bearer token required)
"""

import logging

from django.core.exceptions import ValidationError
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_POST

from .forms import UserForm
from .middleware import read_json_body
from .serializers import user_to_dict

logger = logging.getLogger(__name__)


@csrf_exempt
@require_POST
def user_create(request):
    """
    Create an escalation contact.

    Body: {"phone_number": "+14155550100", "priority": 0}
    """
    form = UserForm(data=read_json_body(request))
    if not form.is_valid():
        raise ValidationError(form.errors.as_data())

    user = form.save()
    logger.info(f'User {user.pk} created with priority {user.priority}')

    return JsonResponse(
        {'message': 'The user created successfully', 'user': user_to_dict(user)},
        status=201
    )
