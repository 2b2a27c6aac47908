from datetime import timedelta

import pytest
from django.utils import timezone

from apps.accounts.backends import issue_token
from apps.accounts.models import User
from apps.notifications import backends
from apps.tasks.models import Task


@pytest.fixture(autouse=True)
def clear_call_outbox():
    backends.outbox.clear()
    yield
    backends.outbox.clear()


@pytest.fixture()
def token():
    return issue_token('tests')


@pytest.fixture()
def auth(token):
    """Extra kwargs for the test client carrying a valid bearer token."""
    return {'HTTP_AUTHORIZATION': f'Bearer {token}'}


@pytest.fixture()
def make_user(db):
    def _make_user(priority=0, phone_number='+14155550100'):
        return User.objects.create(phone_number=phone_number, priority=priority)
    return _make_user


@pytest.fixture()
def make_task(db):
    """Create a task directly through the ORM, bypassing priority computation."""
    def _make_task(title='Task', due_in=timedelta(days=7), **fields):
        fields.setdefault('due_date', timezone.now() + due_in)
        return Task.objects.create(title=title, **fields)
    return _make_task
