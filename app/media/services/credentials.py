"""
Credential issuer for direct-to-storage image uploads.

Turns a batch of client-declared image descriptors into presigned write
grants plus PENDING MediaObject rows. The batch is all-or-nothing: either
every row is persisted and the full credential map is returned, or
nothing is.

Usage:
    issuer = CredentialIssuer(storage)
    credentials = issuer.issue(user, [
        UploadDescriptor(client_key="a", content_type="image/jpeg", size=1024),
    ])
    credentials["a"].original_upload_url
"""

from __future__ import annotations

import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.conf import settings
from django.db import DatabaseError

from core.exceptions import (
    InternalError,
    InvalidArgumentError,
    ResourceExhaustedError,
)
from core.services import BaseService
from media.models import MediaObject
from media.storage import THUMBNAIL_CONTENT_TYPE, build_storage_key

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

    from core.protocols import ObjectStorage


@dataclass(frozen=True)
class UploadDescriptor:
    """One client-declared image in an upload batch."""

    client_key: str
    content_type: str
    size: int | None = None


@dataclass(frozen=True)
class UploadCredential:
    """Write grants and public refs for one image."""

    media_id: uuid.UUID
    original_upload_url: str
    thumbnail_upload_url: str
    original_public_url: str
    thumbnail_public_url: str
    expires_in: int


class CredentialIssuer(BaseService):
    """
    Issues upload credentials and provisional metadata rows.

    Grants for the images of one batch are requested concurrently; each
    result stays keyed to its client_key.
    """

    max_workers = 8

    def __init__(self, storage: ObjectStorage) -> None:
        self.storage = storage

    def issue(
        self,
        user: AbstractBaseUser,
        descriptors: list[UploadDescriptor],
    ) -> dict[str, UploadCredential]:
        """
        Issue credentials for a batch of images.

        Args:
            user: Authenticated caller; becomes the owner of every row
            descriptors: Ordered image descriptors

        Returns:
            Map of client_key to UploadCredential

        Raises:
            InvalidArgumentError: Empty batch, bad client keys, disallowed type
            ResourceExhaustedError: Too many images or file too large
            InternalError: Storage or metadata backend failure
        """
        self._validate(descriptors)

        ttl = settings.MEDIA_UPLOAD_GRANT_TTL_SECONDS
        planned = [(uuid.uuid4(), descriptor) for descriptor in descriptors]

        try:
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(planned))) as pool:
                credentials = list(
                    pool.map(
                        lambda item: self._grant(user, item[0], item[1], ttl),
                        planned,
                    )
                )
        except Exception as e:
            self.get_logger().error(
                "Failed to issue write grants",
                extra={"user_id": user.pk, "error": str(e)},
            )
            raise InternalError("Failed to issue upload credentials") from e

        rows = [
            MediaObject(
                id=media_id,
                user=user,
                client_key=descriptor.client_key,
                status=MediaObject.Status.PENDING,
                content_type=descriptor.content_type,
                original_url=credential.original_public_url,
                thumbnail_url=credential.thumbnail_public_url,
            )
            for (media_id, descriptor), credential in zip(planned, credentials)
        ]

        try:
            with self.atomic():
                MediaObject.objects.bulk_create(rows)
        except DatabaseError as e:
            self.get_logger().error(
                "Failed to persist pending media",
                extra={"user_id": user.pk, "count": len(rows), "error": str(e)},
            )
            raise InternalError("Failed to save upload metadata") from e

        self.get_logger().info(
            "Issued upload credentials",
            extra={"user_id": user.pk, "count": len(rows)},
        )

        return {
            descriptor.client_key: credential
            for (_, descriptor), credential in zip(planned, credentials)
        }

    def _validate(self, descriptors: list[UploadDescriptor]) -> None:
        if not descriptors:
            raise InvalidArgumentError("At least one image is required")

        max_batch = settings.MEDIA_UPLOAD_MAX_BATCH
        if len(descriptors) > max_batch:
            raise ResourceExhaustedError(
                f"Too many images requested (max {max_batch})",
                limit=max_batch,
                actual=len(descriptors),
            )

        allowed_types = settings.MEDIA_UPLOAD_ALLOWED_MIME_TYPES
        max_size = settings.MEDIA_UPLOAD_MAX_FILE_SIZE
        seen_keys = set()

        for descriptor in descriptors:
            if not descriptor.client_key:
                raise InvalidArgumentError("client_key is required")
            if descriptor.client_key in seen_keys:
                raise InvalidArgumentError(
                    f"Duplicate client_key: {descriptor.client_key}",
                    error_code="DUPLICATE_CLIENT_KEY",
                )
            seen_keys.add(descriptor.client_key)

            if descriptor.content_type not in allowed_types:
                raise InvalidArgumentError(
                    f"Unsupported image type: {descriptor.content_type}",
                    error_code="UNSUPPORTED_MIME_TYPE",
                    details={"allowed": list(allowed_types)},
                )

            if descriptor.size is not None and descriptor.size > max_size:
                raise ResourceExhaustedError(
                    f"File too large: {descriptor.client_key}",
                    limit=max_size,
                    actual=descriptor.size,
                )

    def _grant(
        self,
        user: AbstractBaseUser,
        media_id: uuid.UUID,
        descriptor: UploadDescriptor,
        ttl: int,
    ) -> UploadCredential:
        original_key = build_storage_key(
            user.pk, media_id, MediaObject.Variant.ORIGINAL, descriptor.content_type
        )
        thumbnail_key = build_storage_key(
            user.pk, media_id, MediaObject.Variant.THUMBNAIL, descriptor.content_type
        )

        return UploadCredential(
            media_id=media_id,
            original_upload_url=self.storage.issue_write_grant(
                original_key, descriptor.content_type, ttl
            ),
            thumbnail_upload_url=self.storage.issue_write_grant(
                thumbnail_key, THUMBNAIL_CONTENT_TYPE, ttl
            ),
            original_public_url=self.storage.issue_public_read_ref(original_key),
            thumbnail_public_url=self.storage.issue_public_read_ref(thumbnail_key),
            expires_in=ttl,
        )
