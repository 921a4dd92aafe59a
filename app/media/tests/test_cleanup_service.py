"""
Tests for cascade cleanup.

Tests cover:
- Entity deletion removes every bound media row
- One storage deletion per media, enqueued only after commit
- Replies and their media are cleaned up with their target
- Enqueue failures never reach the caller
"""

from __future__ import annotations

import uuid

import pytest

from core.exceptions import NotFoundError, PermissionDeniedError
from media.models import MediaObject
from media.services import CascadeCleanup, schedule_storage_deletion
from media.tests.factories import bound_media
from posts.models import Ask, Record, Reply
from posts.tests.factories import AskFactory, ReplyFactory


@pytest.fixture
def cleanup():
    return CascadeCleanup()


@pytest.mark.django_db
class TestDeleteEntity:
    """Tests for CascadeCleanup.delete_entity."""

    def test_deletes_entity_and_media(
        self, cleanup, user, record_with_media, delete_task, django_capture_on_commit_callbacks
    ):
        """Test 3 bound media leave 0 rows and 3 deletion attempts."""
        record, media = record_with_media

        with django_capture_on_commit_callbacks(execute=True):
            scheduled = cleanup.delete_entity(user, Record, record.id)

        assert scheduled == 3
        assert not Record.objects.filter(id=record.id).exists()
        assert MediaObject.objects.filter(record_id=record.id).count() == 0
        assert delete_task.call_count == 3
        deleted_refs = sorted(call.args[0][0] for call in delete_task.call_args_list)
        assert deleted_refs == sorted(m.original_url for m in media)

    def test_nothing_enqueued_before_commit(
        self, cleanup, user, record_with_media, delete_task, django_capture_on_commit_callbacks
    ):
        """Test deletions wait for the transaction to commit."""
        record, _ = record_with_media

        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            cleanup.delete_entity(user, Record, record.id)

        assert len(callbacks) == 3
        delete_task.assert_not_called()

    def test_reply_media_cleaned_with_target(
        self, cleanup, user, other_user, delete_task, django_capture_on_commit_callbacks
    ):
        """Test deleting an ask also schedules its replies' media."""
        ask = AskFactory(user=user)
        bound_media(ask, 1)
        reply = ReplyFactory(user=other_user, ask=ask, record=None)
        reply_media = bound_media(reply, 2)

        with django_capture_on_commit_callbacks(execute=True):
            scheduled = cleanup.delete_entity(user, Ask, ask.id)

        assert scheduled == 3
        assert not Reply.objects.filter(id=reply.id).exists()
        assert not MediaObject.objects.filter(id__in=[m.id for m in reply_media]).exists()

    def test_not_owner(self, cleanup, other_user, record_with_media, delete_task):
        record, _ = record_with_media

        with pytest.raises(PermissionDeniedError):
            cleanup.delete_entity(other_user, Record, record.id)

        assert Record.objects.filter(id=record.id).exists()
        delete_task.assert_not_called()

    def test_unknown_entity(self, cleanup, user):
        with pytest.raises(NotFoundError):
            cleanup.delete_entity(user, Record, uuid.uuid4())

    def test_enqueue_failure_is_not_raised(
        self, cleanup, user, record_with_media, mocker, django_capture_on_commit_callbacks
    ):
        """Test a broker outage after commit does not fail the delete."""
        record, _ = record_with_media
        delay = mocker.patch(
            "media.tasks.delete_storage_objects.delay",
            side_effect=ConnectionError("broker down"),
        )

        with django_capture_on_commit_callbacks(execute=True):
            cleanup.delete_entity(user, Record, record.id)

        assert delay.call_count == 3
        assert not Record.objects.filter(id=record.id).exists()


@pytest.mark.django_db(transaction=True)
class TestDeleteEntityCommitted:
    """Tests for deletions that really commit, running the on-commit hooks."""

    def test_enqueue_failure_after_commit(self, cleanup, user, record_with_media, mocker):
        """Test a broker outage neither fails the delete nor skips remaining media."""
        record, _ = record_with_media
        delay = mocker.patch(
            "media.tasks.delete_storage_objects.delay",
            side_effect=ConnectionError("broker down"),
        )

        scheduled = cleanup.delete_entity(user, Record, record.id)

        assert scheduled == 3
        assert delay.call_count == 3
        assert not Record.objects.filter(id=record.id).exists()
        assert MediaObject.objects.filter(record_id=record.id).count() == 0

    def test_enqueues_after_commit(self, cleanup, user, record_with_media, delete_task):
        record, media = record_with_media

        cleanup.delete_entity(user, Record, record.id)

        assert sorted(call.args[0] for call in delete_task.call_args_list) == sorted(
            m.storage_refs for m in media
        )


class TestScheduleStorageDeletion:
    """Tests for schedule_storage_deletion."""

    def test_skips_media_without_refs(self, mocker):
        on_commit = mocker.patch("media.services.cleanup.transaction.on_commit")

        scheduled = schedule_storage_deletion([["a", "b"], [], ["c"]])

        assert scheduled == 2
        assert on_commit.call_count == 2
        for call in on_commit.call_args_list:
            assert call.kwargs == {"robust": True}
