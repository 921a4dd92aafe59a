"""
Serializers for records, asks and replies.

Output serializers render an entity with its images in display order.
Input serializers validate request payloads and are parsed through
RequestInputMixin so field errors surface as INVALID_ARGUMENT.
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from core.serializer_mixins import RequestInputMixin, TimestampMixin
from media.models import MediaObject
from media.serializers import (
    BindImageSerializer,
    LocationSerializer,
    MediaObjectSerializer,
    SortedImageSerializer,
)
from posts.models import Ask, Record, Reply

# =============================================================================
# Output
# =============================================================================


class ContentEntitySerializer(TimestampMixin, serializers.ModelSerializer):
    """Fields shared by every entity kind."""

    user_id = serializers.IntegerField(read_only=True)
    images = MediaObjectSerializer(source="media", many=True, read_only=True)

    base_fields = ["id", "user_id", "main_image_url", "media_count", "images"]


class RecordSerializer(ContentEntitySerializer):
    class Meta:
        model = Record
        fields = [*ContentEntitySerializer.base_fields, "description"]
        read_only_fields = fields


class AskSerializer(ContentEntitySerializer):
    center = serializers.SerializerMethodField()

    class Meta:
        model = Ask
        fields = [
            *ContentEntitySerializer.base_fields,
            "question",
            "center",
            "radius_meters",
            "status",
        ]
        read_only_fields = fields

    def get_center(self, obj: Ask) -> dict[str, float]:
        return {"lat": obj.center_lat, "lng": obj.center_lng}


class ReplySerializer(ContentEntitySerializer):
    record_id = serializers.UUIDField(read_only=True, allow_null=True)
    ask_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Reply
        fields = [
            *ContentEntitySerializer.base_fields,
            "record_id",
            "ask_id",
            "content",
            "is_onsite",
        ]
        read_only_fields = fields


class RecordMapImageSerializer(serializers.ModelSerializer):
    """One record image on the map."""

    image_id = serializers.UUIDField(source="id", read_only=True)
    record_id = serializers.UUIDField(read_only=True)

    class Meta:
        model = MediaObject
        fields = ["image_id", "record_id", "thumbnail_url", "lat", "lng", "display_order"]
        read_only_fields = fields


class AskMapSerializer(serializers.ModelSerializer):
    center = serializers.SerializerMethodField()

    class Meta:
        model = Ask
        fields = ["id", "question", "center", "radius_meters", "status", "main_image_url", "created_at"]
        read_only_fields = fields

    def get_center(self, obj: Ask) -> dict[str, float]:
        return {"lat": obj.center_lat, "lng": obj.center_lng}


# =============================================================================
# Input
# =============================================================================


class EntityUpdateSerializer(RequestInputMixin, serializers.Serializer):
    """
    Common edit fields.

    sorted_images is the complete ordered image list the entity should
    end up with; omit it to leave the images untouched.
    """

    sorted_images = SortedImageSerializer(many=True, required=False, allow_empty=True)
    expected_updated_at = serializers.DateTimeField(required=False)

    @staticmethod
    def split(validated_data: dict[str, Any]) -> tuple[dict[str, Any], list | None, Any]:
        """Split into (field edits, target list or None, expected_updated_at)."""
        data = dict(validated_data)
        sorted_images = data.pop("sorted_images", None)
        expected_updated_at = data.pop("expected_updated_at", None)
        target = (
            [SortedImageSerializer.to_target_item(item) for item in sorted_images]
            if sorted_images is not None
            else None
        )
        return data, target, expected_updated_at


def to_specs(images: list[dict[str, Any]]) -> list:
    return [BindImageSerializer.to_spec(item) for item in images]


class RecordCreateSerializer(RequestInputMixin, serializers.Serializer):
    description = serializers.CharField(max_length=5000)
    images = BindImageSerializer(many=True, allow_empty=True)


class RecordUpdateSerializer(EntityUpdateSerializer):
    description = serializers.CharField(max_length=5000, required=False)


class AskCreateSerializer(RequestInputMixin, serializers.Serializer):
    question = serializers.CharField(max_length=2000)
    center = LocationSerializer()
    radius_meters = serializers.IntegerField(min_value=1, max_value=50_000, default=500)
    images = BindImageSerializer(many=True, required=False, default=list)


class AskUpdateSerializer(EntityUpdateSerializer):
    question = serializers.CharField(max_length=2000, required=False)
    radius_meters = serializers.IntegerField(min_value=1, max_value=50_000, required=False)
    status = serializers.ChoiceField(choices=Ask.Status.choices, required=False)


class ReplyCreateSerializer(RequestInputMixin, serializers.Serializer):
    content = serializers.CharField(max_length=2000)
    record_id = serializers.UUIDField(required=False, allow_null=True)
    ask_id = serializers.UUIDField(required=False, allow_null=True)
    images = BindImageSerializer(many=True, required=False, default=list)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if (attrs.get("record_id") is None) == (attrs.get("ask_id") is None):
            raise serializers.ValidationError("Provide exactly one of record_id or ask_id.")
        return attrs


class ReplyUpdateSerializer(EntityUpdateSerializer):
    content = serializers.CharField(max_length=2000, required=False)


class MapQuerySerializer(RequestInputMixin, serializers.Serializer):
    min_lat = serializers.FloatField(min_value=-90, max_value=90)
    max_lat = serializers.FloatField(min_value=-90, max_value=90)
    min_lng = serializers.FloatField(min_value=-180, max_value=180)
    max_lng = serializers.FloatField(min_value=-180, max_value=180)
