"""
Tests for the entity binder.

Tests cover:
- Array order becomes display order; index 0 is the main image
- Ownership failures leave nothing behind
- Record mode location requirement
- Per-kind count ceilings
"""

from __future__ import annotations

import uuid

import pytest

from core.exceptions import (
    InvalidArgumentError,
    PermissionDeniedError,
    ResourceExhaustedError,
)
from media.models import MediaObject
from media.services import BindSpec, EntityBinder
from media.tests.factories import MediaObjectFactory, bound_media
from posts.models import Ask, Record
from posts.tests.factories import RecordFactory

ASK_FIELDS = {"question": "Is it raining?", "center_lat": 25.0, "center_lng": 121.5}


def located(media, lat=25.03, lng=121.56):
    return BindSpec(media_id=media.id, lat=lat, lng=lng)


@pytest.fixture
def binder():
    return EntityBinder()


@pytest.mark.django_db
class TestCreateRecord:
    """Tests for creating records with media."""

    def test_binds_in_array_order(self, binder, user, pending_media):
        """Test display order follows array position, not creation order."""
        a, b, c = pending_media
        specs = [located(c), located(a), located(b)]

        record = binder.create(user, Record, {"description": "sunset"}, specs)

        orders = dict(
            MediaObject.objects.filter(record=record).values_list("id", "display_order")
        )
        assert orders == {c.id: 0, a.id: 1, b.id: 2}

    def test_media_become_completed(self, binder, user, pending_media):
        record = binder.create(
            user, Record, {"description": "x"}, [located(m) for m in pending_media]
        )

        for media in pending_media:
            media.refresh_from_db()
            assert media.status == MediaObject.Status.COMPLETED
            assert media.parent_ref == ("record", record.id)

    def test_sets_main_image_and_count(self, binder, user, pending_media):
        """Test main image is the thumbnail of the first item."""
        first = pending_media[1]
        specs = [located(first), located(pending_media[0])]

        record = binder.create(user, Record, {"description": "x"}, specs)

        record.refresh_from_db()
        assert record.main_image_url == first.thumbnail_url
        assert record.media_count == 2

    def test_stores_capture_metadata(self, binder, user, pending_media):
        media = pending_media[0]
        spec = BindSpec(
            media_id=media.id, lat=25.1, lng=121.2, address="Taipei 101"
        )

        binder.create(user, Record, {"description": "x"}, [spec])

        media.refresh_from_db()
        assert (media.lat, media.lng, media.address) == (25.1, 121.2, "Taipei 101")

    def test_missing_location_rejects_whole_request(self, binder, user, pending_media):
        """Test one image without location creates nothing."""
        a, b, _ = pending_media
        specs = [located(a), BindSpec(media_id=b.id)]

        with pytest.raises(InvalidArgumentError) as exc_info:
            binder.create(user, Record, {"description": "x"}, specs)

        assert exc_info.value.error_code == "MISSING_LOCATION"
        assert Record.objects.count() == 0
        assert MediaObject.objects.filter(status=MediaObject.Status.COMPLETED).count() == 0

    def test_invalid_location_rejected(self, binder, user, pending_media):
        with pytest.raises(InvalidArgumentError):
            binder.create(
                user,
                Record,
                {"description": "x"},
                [located(pending_media[0], lat=91.0)],
            )

    def test_record_needs_at_least_one_image(self, binder, user):
        with pytest.raises(InvalidArgumentError):
            binder.create(user, Record, {"description": "x"}, [])

        assert Record.objects.count() == 0

    def test_too_many_images_reports_limit(self, binder, user):
        media = MediaObjectFactory.create_batch(11, user=user)

        with pytest.raises(ResourceExhaustedError) as exc_info:
            binder.create(user, Record, {"description": "x"}, [located(m) for m in media])

        assert exc_info.value.details == {"limit": 10, "actual": 11}

    def test_duplicate_media_rejected(self, binder, user, pending_media):
        media = pending_media[0]

        with pytest.raises(InvalidArgumentError):
            binder.create(
                user, Record, {"description": "x"}, [located(media), located(media)]
            )


@pytest.mark.django_db
class TestBindOwnership:
    """Tests for ownership enforcement while binding."""

    def test_foreign_media_denied(self, binder, user, pending_media, foreign_media):
        """Test binding someone else's upload fails and creates nothing."""
        specs = [located(pending_media[0]), located(foreign_media)]

        with pytest.raises(PermissionDeniedError):
            binder.create(user, Record, {"description": "x"}, specs)

        assert Record.objects.count() == 0
        foreign_media.refresh_from_db()
        assert foreign_media.status == MediaObject.Status.PENDING
        pending_media[0].refresh_from_db()
        assert pending_media[0].status == MediaObject.Status.PENDING

    def test_unknown_media_denied(self, binder, user):
        """Test missing ids are reported like foreign ones."""
        with pytest.raises(PermissionDeniedError):
            binder.create(
                user,
                Record,
                {"description": "x"},
                [BindSpec(media_id=uuid.uuid4(), lat=1.0, lng=1.0)],
            )

    def test_bound_media_cannot_be_rebound(self, binder, user):
        """Test media already bound to one record cannot join another."""
        other_record = RecordFactory(user=user)
        (media,) = bound_media(other_record, 1)

        with pytest.raises(PermissionDeniedError):
            binder.create(user, Record, {"description": "x"}, [located(media)])

        media.refresh_from_db()
        assert media.record_id == other_record.id

    def test_item_vanishing_mid_bind_rolls_back(self, binder, user, pending_media, mocker):
        """Test a failed per-item bind leaves no partial entity."""
        from media.services import binding

        original = binding.bind_media
        calls = []

        def flaky(user, entity, spec, order):
            calls.append(order)
            if order == 1:
                MediaObject.objects.filter(id=spec.media_id).delete()
            return original(user, entity, spec, order)

        mocker.patch.object(binding, "bind_media", side_effect=flaky)

        with pytest.raises(PermissionDeniedError):
            binder.create(
                user, Record, {"description": "x"}, [located(m) for m in pending_media]
            )

        assert calls == [0, 1]
        assert Record.objects.count() == 0
        assert MediaObject.objects.filter(status=MediaObject.Status.COMPLETED).count() == 0


@pytest.mark.django_db
class TestCreateAsk:
    """Tests for kinds where images are optional."""

    def test_ask_without_images(self, binder, user):
        ask = binder.create(user, Ask, ASK_FIELDS, [])

        assert ask.media_count == 0
        assert ask.main_image_url is None

    def test_ask_images_without_location(self, binder, user, pending_media):
        ask = binder.create(
            user, Ask, ASK_FIELDS, [BindSpec(media_id=m.id) for m in pending_media]
        )

        assert ask.media_count == 3
        assert MediaObject.objects.filter(ask=ask, lat__isnull=True).count() == 3

    def test_ask_ceiling(self, binder, user):
        media = MediaObjectFactory.create_batch(6, user=user)

        with pytest.raises(ResourceExhaustedError) as exc_info:
            binder.create(user, Ask, ASK_FIELDS, [BindSpec(media_id=m.id) for m in media])

        assert exc_info.value.limit == 5
        assert exc_info.value.actual == 6
