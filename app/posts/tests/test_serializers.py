"""
Tests for posts output serializers.

Tests cover:
- Timestamps are part of every entity representation
- Images render in display order with their location
"""

from __future__ import annotations

import pytest

from media.tests.factories import bound_media
from posts.serializers import AskSerializer, RecordSerializer, ReplySerializer
from posts.tests.factories import AskFactory, RecordFactory, ReplyFactory


@pytest.mark.django_db
class TestEntitySerializers:
    """Tests for RecordSerializer, AskSerializer and ReplySerializer."""

    @pytest.mark.parametrize(
        ("serializer_class", "factory"),
        [
            (RecordSerializer, RecordFactory),
            (AskSerializer, AskFactory),
            (ReplySerializer, ReplyFactory),
        ],
    )
    def test_includes_timestamps(self, serializer_class, factory):
        data = serializer_class(factory()).data

        assert data["created_at"] is not None
        assert data["updated_at"] is not None

    def test_record_images(self, user):
        record = RecordFactory(user=user)
        media = bound_media(record, 2)

        data = RecordSerializer(record).data

        assert [image["id"] for image in data["images"]] == [str(m.id) for m in media]
        assert data["images"][0]["location"] == {"lat": 25.03, "lng": 121.56}
        assert data["images"][0]["image_url"] == media[0].original_url

    def test_ask_center(self, user):
        ask = AskFactory(user=user, center_lat=10.5, center_lng=-20.25)

        assert AskSerializer(ask).data["center"] == {"lat": 10.5, "lng": -20.25}
