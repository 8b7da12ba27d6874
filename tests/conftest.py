"""
Shared fixtures for django-inkwell tests.
"""
import pytest

from inkwell import services
from inkwell.models import User


@pytest.fixture
def author(db):
    """User A: writes the post."""
    return User.objects.create_user(
        email="author@example.com",
        password="testpass123",
        name="Author",
    )


@pytest.fixture
def reader(db):
    """User B: reads, comments and reacts."""
    return User.objects.create_user(
        email="reader@example.com",
        password="testpass123",
        name="Reader",
    )


@pytest.fixture
def admin(db):
    return User.objects.create_superuser(
        email="admin@example.com",
        password="testpass123",
        name="Admin",
    )


@pytest.fixture
def post(author):
    """Post P by user A."""
    return services.create_post(
        author,
        title="T",
        content="<p>hi</p>",
        categories=["General"],
    )


@pytest.fixture
def author_client(client, author):
    client.force_login(author)
    return client


@pytest.fixture
def reader_client(client, reader):
    client.force_login(reader)
    return client
