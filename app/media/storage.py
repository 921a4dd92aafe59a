"""
S3-compatible object storage for uploaded images.

Clients PUT image bytes straight to the bucket with presigned URLs; the
application only stores keys and public references. Works against AWS S3
and any S3-compatible endpoint (Cloudflare R2, MinIO) via
OBJECT_STORAGE_ENDPOINT_URL.

Key scheme:
    images/{owner_id}/{media_id}_original.{ext}
    images/{owner_id}/{media_id}_thumbnail.jpg

Usage:
    from media.storage import build_object_storage

    storage = build_object_storage()
    url = storage.issue_write_grant(key, "image/jpeg", ttl_seconds=900)
"""

from __future__ import annotations

import logging

import boto3
from botocore.config import Config
from django.apps import apps
from django.conf import settings

logger = logging.getLogger(__name__)

THUMBNAIL_CONTENT_TYPE = "image/jpeg"

EXTENSION_BY_MIME_TYPE = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/heic": "heic",
    "image/webp": "webp",
}


def build_storage_key(owner_id, media_id, variant: str, content_type: str) -> str:
    """
    Derive the storage key of one image variant.

    The thumbnail is always a JPEG regardless of the original's type.

    Args:
        owner_id: Owning user id
        media_id: MediaObject id
        variant: "original" or "thumbnail"
        content_type: Declared MIME type of the original

    Returns:
        Deterministic storage key
    """
    if variant == "thumbnail":
        ext = EXTENSION_BY_MIME_TYPE[THUMBNAIL_CONTENT_TYPE]
    else:
        ext = EXTENSION_BY_MIME_TYPE.get(content_type, "bin")
    return f"images/{owner_id}/{media_id}_{variant}.{ext}"


class S3ObjectStorage:
    """
    ObjectStorage implementation backed by an S3 bucket.

    The boto3 client is created lazily on first use.
    """

    def __init__(
        self,
        bucket_name: str,
        public_base_url: str = "",
        endpoint_url: str | None = None,
        region_name: str | None = None,
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
    ) -> None:
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip("/")
        self.endpoint_url = endpoint_url or None
        self.region_name = region_name or None
        self.access_key_id = access_key_id or None
        self.secret_access_key = secret_access_key or None
        self._s3_client = None

    @property
    def s3_client(self):
        """Get or create S3 client."""
        if self._s3_client is None:
            self._s3_client = boto3.client(
                "s3",
                endpoint_url=self.endpoint_url,
                region_name=self.region_name,
                aws_access_key_id=self.access_key_id,
                aws_secret_access_key=self.secret_access_key,
                config=Config(signature_version="s3v4"),
            )
        return self._s3_client

    def issue_write_grant(self, key: str, content_type: str, ttl_seconds: int) -> str:
        return self.s3_client.generate_presigned_url(
            ClientMethod="put_object",
            Params={
                "Bucket": self.bucket_name,
                "Key": key,
                "ContentType": content_type,
            },
            ExpiresIn=ttl_seconds,
        )

    def issue_public_read_ref(self, key: str) -> str:
        if not self.public_base_url:
            return key
        return f"{self.public_base_url}/{key}"

    def key_from_ref(self, ref: str) -> str:
        """Map a public reference back to its storage key."""
        prefix = f"{self.public_base_url}/"
        if self.public_base_url and ref.startswith(prefix):
            return ref[len(prefix):]
        return ref

    def delete_object(self, ref: str) -> None:
        key = self.key_from_ref(ref)
        self.s3_client.delete_object(Bucket=self.bucket_name, Key=key)
        logger.debug("Deleted storage object", extra={"key": key})


def build_object_storage() -> S3ObjectStorage:
    """Build the object storage collaborator from settings."""
    return S3ObjectStorage(
        bucket_name=settings.OBJECT_STORAGE_BUCKET,
        public_base_url=settings.OBJECT_STORAGE_PUBLIC_BASE_URL,
        endpoint_url=settings.OBJECT_STORAGE_ENDPOINT_URL,
        region_name=settings.OBJECT_STORAGE_REGION,
        access_key_id=settings.OBJECT_STORAGE_ACCESS_KEY_ID,
        secret_access_key=settings.OBJECT_STORAGE_SECRET_ACCESS_KEY,
    )


def get_object_storage():
    """
    Process-wide storage collaborator.

    MediaConfig.ready() builds it once. This is the single lookup point;
    views take it as a constructor argument and only Celery tasks, which
    have no caller to inject it, read it here.
    """
    return apps.get_app_config("media").storage
