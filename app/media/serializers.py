"""
Serializers for upload credentials and media binding payloads.

Provides:
- UploadRequestSerializer: Batch of image descriptors to issue credentials for
- UploadCredentialsResponseSerializer: Credential map keyed by client_key
- MediaObjectSerializer: Read-only bound image representation
- BindImageSerializer: One image to bind when creating an entity
- SortedImageSerializer: One EXISTING/NEW entry of an edit target list
"""

from __future__ import annotations

from typing import Any

from drf_spectacular.utils import OpenApiExample, extend_schema_serializer
from rest_framework import serializers

from core.serializer_mixins import RequestInputMixin
from core.validators import validate_latitude, validate_longitude
from media.models import MediaObject
from media.services import BindSpec, TargetItem, UploadDescriptor


class LocationSerializer(serializers.Serializer):
    """Geographic coordinate in WGS84 degrees."""

    lat = serializers.FloatField(validators=[validate_latitude])
    lng = serializers.FloatField(validators=[validate_longitude])


# =============================================================================
# Upload credentials
# =============================================================================


class ImageRequestSerializer(serializers.Serializer):
    """One image the client intends to upload."""

    client_key = serializers.CharField(
        max_length=128,
        help_text="Caller correlation token, unique within the batch",
    )
    file_type = serializers.CharField(
        max_length=64,
        help_text="MIME type of the original image",
    )
    file_size = serializers.IntegerField(
        min_value=1,
        required=False,
        allow_null=True,
        help_text="Declared size of the original image in bytes",
    )

    def validate_file_type(self, value: str) -> str:
        return value.lower()


@extend_schema_serializer(
    examples=[
        OpenApiExample(
            "Two images",
            value={
                "image_requests": [
                    {"client_key": "a", "file_type": "image/jpeg", "file_size": 1048576},
                    {"client_key": "b", "file_type": "image/png"},
                ]
            },
            request_only=True,
        ),
    ]
)
class UploadRequestSerializer(RequestInputMixin, serializers.Serializer):
    """
    Batch of images to issue upload credentials for.

    Batch size, MIME types and sizes are enforced by the credential
    issuer so that limit errors carry limit and actual values.
    """

    image_requests = ImageRequestSerializer(many=True, allow_empty=True)

    @staticmethod
    def to_descriptors(validated_data: dict[str, Any]) -> list[UploadDescriptor]:
        return [
            UploadDescriptor(
                client_key=item["client_key"],
                content_type=item["file_type"],
                size=item.get("file_size"),
            )
            for item in validated_data["image_requests"]
        ]


class UploadCredentialSerializer(serializers.Serializer):
    """Write grants and public refs for one image."""

    upload_id = serializers.UUIDField(source="media_id")
    original_upload_url = serializers.CharField()
    thumbnail_upload_url = serializers.CharField()
    original_public_url = serializers.CharField()
    thumbnail_public_url = serializers.CharField()
    expires_in = serializers.IntegerField(help_text="Seconds until the upload URLs expire")


class UploadCredentialsResponseSerializer(serializers.Serializer):
    upload_credentials = serializers.DictField(child=UploadCredentialSerializer())


# =============================================================================
# Bound media
# =============================================================================


class MediaObjectSerializer(serializers.ModelSerializer):
    """Read-only serializer for images bound to an entity."""

    image_url = serializers.CharField(source="original_url", read_only=True)
    location = serializers.SerializerMethodField()

    class Meta:
        model = MediaObject
        fields = [
            "id",
            "image_url",
            "thumbnail_url",
            "display_order",
            "location",
            "captured_at",
            "address",
        ]
        read_only_fields = fields

    def get_location(self, obj: MediaObject) -> dict[str, float] | None:
        return obj.location


class BindImageSerializer(serializers.Serializer):
    """One uploaded image to bind, in display order."""

    upload_id = serializers.UUIDField()
    location = LocationSerializer(required=False, allow_null=True)
    captured_at = serializers.DateTimeField(required=False, allow_null=True)
    address = serializers.CharField(
        max_length=512, required=False, allow_null=True, allow_blank=True
    )

    @staticmethod
    def to_spec(item: dict[str, Any]) -> BindSpec:
        location = item.get("location") or {}
        return BindSpec(
            media_id=item["upload_id"],
            lat=location.get("lat"),
            lng=location.get("lng"),
            captured_at=item.get("captured_at"),
            address=item.get("address") or None,
        )


class SortedImageSerializer(BindImageSerializer):
    """
    One entry of an edit target list.

    EXISTING entries reference a bound image by image_id; NEW entries
    reference a PENDING upload by upload_id.
    """

    type = serializers.ChoiceField(choices=[TargetItem.EXISTING, TargetItem.NEW])
    image_id = serializers.UUIDField(required=False)
    upload_id = serializers.UUIDField(required=False)

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if attrs["type"] == TargetItem.EXISTING and not attrs.get("image_id"):
            raise serializers.ValidationError(
                {"image_id": "Required for EXISTING images."}
            )
        if attrs["type"] == TargetItem.NEW and not attrs.get("upload_id"):
            raise serializers.ValidationError({"upload_id": "Required for NEW images."})
        return attrs

    @classmethod
    def to_target_item(cls, item: dict[str, Any]) -> TargetItem:
        if item["type"] == TargetItem.EXISTING:
            return TargetItem.existing(item["image_id"])
        return TargetItem.new(cls.to_spec(item))

