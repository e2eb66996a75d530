"""
Pytest fixtures for the kanban board tests.
"""

import pytest
from django.test import Client

from apps.core.choices import TaskStatus
from apps.core.models import Task, User
from apps.core.tokens import issue_token


@pytest.fixture
def user(db):
    """Registered user who owns the tasks under test."""
    return User.objects.create_user(email="alice@example.com", password="s3cret-pass", name="Alice")


@pytest.fixture
def other_user(db):
    """A second user, never the owner."""
    return User.objects.create_user(email="bob@example.com", password="s3cret-pass", name="Bob")


@pytest.fixture
def make_task(user):
    """Factory creating tasks directly in the store."""

    def _make(title="Task", order=1000.0, status=TaskStatus.TODO, owner=None, description=None):
        return Task.objects.create(
            title=title,
            description=description,
            order=order,
            status=status,
            owner=owner or user,
        )

    return _make


def bearer_client(user):
    return Client(HTTP_AUTHORIZATION=f"Bearer {issue_token(user)}")


@pytest.fixture
def api_client(user):
    """Client authenticated as `user`."""
    return bearer_client(user)


@pytest.fixture
def other_client(other_user):
    """Client authenticated as `other_user`."""
    return bearer_client(other_user)
