"""
Root pytest configuration for the Django project.

This module configures pytest-django and provides project-wide fixtures.
App-specific fixtures are defined in each app's tests/conftest.py.

Model imports stay inside fixture bodies: this conftest is loaded
before Django is set up.
"""

from __future__ import annotations

import os

import django
import pytest

# Ensure Django settings are configured before any tests run
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")


def pytest_configure():
    """Configure Django settings before tests run."""
    django.setup()

    from django.conf import settings

    # Disable throttling during tests to prevent rate limit failures
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []
    settings.REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}

    # Use fast password hasher for tests
    settings.PASSWORD_HASHERS = [
        "django.contrib.auth.hashers.MD5PasswordHasher",
    ]


def pytest_collection_modifyitems(items):
    """
    Auto-mark tests based on filename patterns.

    Mapping:
    - test_views.py, test_tasks.py, test_*_service.py → integration
    - test_models.py, test_serializers.py, test_validators.py, etc. → unit
    - Unmatched files → integration (safe default for Django)

    Explicit markers on test functions/classes take precedence.
    """
    unit_patterns = [
        "test_models.py",
        "test_serializers.py",
        "test_validators.py",
        "test_exceptions.py",
        "test_storage.py",
        "test_geo.py",
    ]

    for item in items:
        existing_markers = {m.name for m in item.iter_markers()}
        if existing_markers & {"unit", "integration", "e2e"}:
            continue

        filename = str(item.fspath).split("/")[-1]
        if any(pattern in filename for pattern in unit_patterns):
            item.add_marker(pytest.mark.unit)
        else:
            item.add_marker(pytest.mark.integration)


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def api_client():
    """Return unauthenticated API client."""
    from rest_framework.test import APIClient

    return APIClient()


@pytest.fixture
def user(db):
    """Create a regular user."""
    from posts.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def other_user(db):
    """Create a second user that owns nothing of the first user's."""
    from posts.tests.factories import UserFactory

    return UserFactory()


@pytest.fixture
def authenticated_client(user):
    """Return API client authenticated with JWT token."""
    from rest_framework.test import APIClient
    from rest_framework_simplejwt.tokens import RefreshToken

    client = APIClient()
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


# =============================================================================
# Collaborator Fixtures
# =============================================================================


@pytest.fixture
def fake_storage(monkeypatch):
    """In-memory object storage installed on the media app config."""
    from django.apps import apps

    from media.tests.fakes import InMemoryObjectStorage

    storage = InMemoryObjectStorage()
    monkeypatch.setattr(apps.get_app_config("media"), "storage", storage)
    return storage
