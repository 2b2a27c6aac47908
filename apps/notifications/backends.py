"""
Outbound call backends.

Selected with the CALL_BACKEND setting, the same way Django selects an
EMAIL_BACKEND:
- TwilioCallBackend: places real voice calls (production)
- ConsoleCallBackend: only logs the call (development)
- LocMemCallBackend: records calls in `outbox` (tests)
"""

import logging

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.utils.module_loading import import_string

logger = logging.getLogger(__name__)

# Calls recorded by LocMemCallBackend, cleared by tests
outbox = []


class BaseCallBackend:
    """Interface every call backend implements."""

    def place_call(self, to, from_=None):
        """Dial `to` and return a provider-specific call identifier."""
        raise NotImplementedError('subclasses of BaseCallBackend must override place_call()')


class TwilioCallBackend(BaseCallBackend):
    """
    Voice calls through the Twilio REST API.

    The callee hears the TwiML document at TWILIO_VOICE_URL.
    """

    def __init__(self, account_sid=None, auth_token=None, from_number=None, voice_url=None):
        self.account_sid = account_sid or settings.TWILIO_ACCOUNT_SID
        self.auth_token = auth_token or settings.TWILIO_AUTH_TOKEN
        self.from_number = from_number or settings.TWILIO_PHONE_NUMBER
        self.voice_url = voice_url or settings.TWILIO_VOICE_URL
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if not (self.account_sid and self.auth_token):
                raise ImproperlyConfigured(
                    'TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN must be set to place calls.'
                )
            from twilio.rest import Client
            self._client = Client(self.account_sid, self.auth_token)
        return self._client

    def place_call(self, to, from_=None):
        call = self.client.calls.create(
            url=self.voice_url,
            from_=from_ or self.from_number,
            to=to,
        )
        return call.sid


class ConsoleCallBackend(BaseCallBackend):
    """Log calls instead of dialling."""

    def place_call(self, to, from_=None):
        logger.info(f'[console] Call from {from_ or settings.TWILIO_PHONE_NUMBER or "-"} to {to}')
        return 'console'


class LocMemCallBackend(BaseCallBackend):
    """Append calls to the module-level `outbox` list."""

    def place_call(self, to, from_=None):
        outbox.append({'to': to, 'from': from_ or settings.TWILIO_PHONE_NUMBER})
        return f'locmem-{len(outbox)}'


def get_call_backend(backend=None, **kwargs):
    """Instantiate the backend at `backend` (dotted path) or CALL_BACKEND."""
    klass = import_string(backend or settings.CALL_BACKEND)
    return klass(**kwargs)
