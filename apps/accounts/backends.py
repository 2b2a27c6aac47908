"""
Bearer token authentication for the JSON API.

Tokens are HS256 JWTs signed with JWT_SECRET_KEY. There is no login
endpoint: tokens are minted out of band with `manage.py issue_token`.

Responses:
- Missing or malformed Authorization header: 401
- Token failing signature or expiry verification: 403
"""

import logging
from datetime import timedelta
from functools import wraps

import jwt
from django.conf import settings
from django.http import JsonResponse
from django.utils import timezone

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Raised when a bearer token cannot be accepted."""

    def __init__(self, message, status=403):
        super().__init__(message)
        self.message = message
        self.status = status


def get_bearer_token(request):
    """
    Extract the token from an `Authorization: Bearer <token>` header.

    Raises:
        TokenError (401): If the header is absent or not a bearer header
    """
    header = request.headers.get('Authorization', '')
    scheme, _, token = header.strip().partition(' ')

    if not header or scheme.lower() != 'bearer' or not token.strip():
        raise TokenError(
            'Unauthorized. Please add authorization token',
            status=401
        )

    return token.strip()


def decode_token(token):
    """
    Verify a token and return its claims.

    Raises:
        TokenError (403): If the signature, expiry or format is invalid
    """
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
        )
    except jwt.InvalidTokenError as exc:
        logger.warning(f'Token verification error: {exc}')
        raise TokenError('Authentication Failed. Please check your auth token') from exc


def issue_token(subject, expires_in=None):
    """
    Mint a signed token for an API client.

    Args:
        subject: Free-form client identifier stored in the `sub` claim
        expires_in: timedelta lifetime (defaults to JWT_EXPIRY_HOURS)

    Returns:
        Encoded token string
    """
    if expires_in is None:
        expires_in = timedelta(hours=settings.JWT_EXPIRY_HOURS)

    now = timezone.now()
    payload = {
        'sub': str(subject),
        'iat': now,
        'exp': now + expires_in,
    }
    return jwt.encode(payload, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def token_required(view_func):
    """
    Decorator rejecting requests without a valid bearer token.

    Runs before any view logic. Verified claims are available as
    `request.jwt_payload`.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        try:
            request.jwt_payload = decode_token(get_bearer_token(request))
        except TokenError as exc:
            return JsonResponse({'error': exc.message}, status=exc.status)
        return view_func(request, *args, **kwargs)

    return wrapper
