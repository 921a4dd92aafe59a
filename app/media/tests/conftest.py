"""
Test fixtures for media app.

Provides fixtures for:
- Pending uploads owned by the test user
- Records with bound media
- A patched storage deletion task
"""

from __future__ import annotations

import pytest

from media.tests.factories import MediaObjectFactory, bound_media
from posts.tests.factories import RecordFactory


@pytest.fixture
def pending_media(user):
    """Three PENDING uploads owned by the test user."""
    return MediaObjectFactory.create_batch(3, user=user)


@pytest.fixture
def foreign_media(other_user):
    """A PENDING upload owned by another user."""
    return MediaObjectFactory(user=other_user)


@pytest.fixture
def record(user):
    """A record owned by the test user with no media yet."""
    return RecordFactory(user=user)


@pytest.fixture
def record_with_media(record):
    """A record with three bound media at display orders 0, 1, 2."""
    media = bound_media(record, 3)
    record.main_image_url = media[0].thumbnail_url
    record.media_count = 3
    record.save()
    return record, media


@pytest.fixture
def delete_task(mocker):
    """Patched storage deletion task; inspect .call_args_list."""
    return mocker.patch("media.tasks.delete_storage_objects.delay")
