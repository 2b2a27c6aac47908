"""
Custom middleware and request helpers for the JSON API.

Includes:
- read_json_body / get_request_params: payload parsing for API views
- ApiExceptionMiddleware: maps exceptions raised by /api/ views to JSON errors

Error mapping:
- ValidationError -> 400
- Http404 / ObjectDoesNotExist -> 404
- anything else -> 500 (logged with traceback)
"""

import json
import logging

from django.core.exceptions import ObjectDoesNotExist, ValidationError
from django.http import Http404, JsonResponse

logger = logging.getLogger(__name__)


def is_api_request(request):
    """Check if the request targets the JSON API."""
    return request.path.startswith('/api/')


def read_json_body(request):
    """
    Decode the request body as a JSON object.

    An empty body yields an empty dict.

    Raises:
        ValidationError: If the body is not valid JSON or not an object
    """
    if not request.body:
        return {}

    try:
        payload = json.loads(request.body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError('Request body must be valid JSON.', code='invalid_json')

    if not isinstance(payload, dict):
        raise ValidationError('Request body must be a JSON object.', code='invalid_json')

    return payload


def get_request_params(request):
    """
    Merge query string parameters with an optional JSON body.

    List endpoints accept filters either way; body values win.
    """
    params = request.GET.dict()
    params.update(read_json_body(request))
    return params


def validation_error_response(error):
    """Build a 400 response from a ValidationError."""
    if hasattr(error, 'error_dict'):
        details = {field: [str(m) for m in messages] for field, messages in error.message_dict.items()}
        message = next(iter(details.values()))[0]
    else:
        details = error.messages
        message = details[0] if details else 'Invalid input'

    return JsonResponse({'error': message, 'details': details}, status=400)


class ApiExceptionMiddleware:
    """
    Convert exceptions escaping API views into JSON responses.

    Only requests under /api/ are handled; admin pages keep Django's
    default error handling.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if not is_api_request(request):
            return None

        if isinstance(exception, ValidationError):
            return validation_error_response(exception)

        if isinstance(exception, (Http404, ObjectDoesNotExist)):
            message = str(exception) or 'Not found'
            return JsonResponse({'error': message}, status=404)

        logger.exception(f'Unhandled error on {request.method} {request.path}')
        return JsonResponse({'error': 'Internal Server Error'}, status=500)
