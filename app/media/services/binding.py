"""
Entity binder: creates a content entity and binds verified media to it.

The whole create runs in one transaction. Validation and ownership
verification complete before the first write; if any per-item bind
matches no row (the media vanished or was bound concurrently), the
transaction rolls back and no entity is left behind.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import UUID

from django.utils import timezone

from core.exceptions import InvalidArgumentError, PermissionDeniedError
from core.services import BaseService
from core.validators import is_valid_coordinate
from media.models import MediaObject
from media.models.media_object import UNBOUND
from media.policies import MediaPolicy, get_media_policy
from media.services.ownership import OwnershipVerifier

if TYPE_CHECKING:
    from collections.abc import Sequence

    from django.contrib.auth.models import AbstractBaseUser

    from posts.models import ContentEntity


@dataclass(frozen=True)
class BindSpec:
    """One media to bind, with optional capture metadata."""

    media_id: UUID
    lat: float | None = None
    lng: float | None = None
    captured_at: datetime | None = None
    address: str | None = None

    @property
    def has_location(self) -> bool:
        return self.lat is not None or self.lng is not None

    def metadata(self) -> dict[str, Any]:
        return {
            "lat": self.lat,
            "lng": self.lng,
            "captured_at": self.captured_at,
            "address": self.address,
        }


def check_spec_location(spec: BindSpec, policy: MediaPolicy) -> None:
    """
    Validate the location of one bind spec against the entity policy.

    Raises:
        InvalidArgumentError: Location missing where required, or invalid
    """
    if not spec.has_location:
        if policy.require_location:
            raise InvalidArgumentError(
                f"Every {policy.kind} image needs a location",
                error_code="MISSING_LOCATION",
                details={"media_id": str(spec.media_id)},
            )
        return

    if not is_valid_coordinate(spec.lat, spec.lng):
        raise InvalidArgumentError(
            "Invalid image location",
            error_code="INVALID_LOCATION",
            details={"media_id": str(spec.media_id)},
        )


def bind_media(
    user: AbstractBaseUser,
    entity: ContentEntity,
    spec: BindSpec,
    display_order: int,
) -> None:
    """
    Transition one PENDING media to COMPLETED under the given entity.

    Raises:
        PermissionDeniedError: The media is no longer PENDING and unbound
    """
    updated = MediaObject.objects.filter(
        UNBOUND,
        id=spec.media_id,
        user=user,
        status=MediaObject.Status.PENDING,
    ).update(
        status=MediaObject.Status.COMPLETED,
        display_order=display_order,
        updated_at=timezone.now(),
        **{entity.kind: entity},
        **spec.metadata(),
    )
    if updated != 1:
        raise PermissionDeniedError(
            "One or more images are not available to you",
            error_code="MEDIA_NOT_OWNED",
        )


def refresh_media_summary(entity: ContentEntity) -> ContentEntity:
    """Recompute main_image_url and media_count from the bound media."""
    media = list(
        MediaObject.objects.filter(**entity.media_scope())
        .order_by("display_order")
        .values_list("thumbnail_url", flat=True)
    )
    entity.main_image_url = media[0] if media else None
    entity.media_count = len(media)
    entity.save(update_fields=["main_image_url", "media_count", "updated_at"])
    return entity


class EntityBinder(BaseService):
    """
    Creates content entities together with their ordered media.

    Array position is the display order; index 0 is the main image.
    """

    def __init__(self, verifier: OwnershipVerifier | None = None) -> None:
        self.verifier = verifier or OwnershipVerifier()

    def create(
        self,
        user: AbstractBaseUser,
        model: type[ContentEntity],
        fields: dict[str, Any],
        specs: Sequence[BindSpec],
    ) -> ContentEntity:
        """
        Create an entity and bind the given media to it.

        Args:
            user: Authenticated caller; becomes the entity owner
            model: Entity model class (Record, Ask or Reply)
            fields: Model field values for the new entity
            specs: Ordered media to bind

        Returns:
            The created entity with main_image_url and media_count set

        Raises:
            InvalidArgumentError: Duplicate ids, missing or invalid location
            ResourceExhaustedError: Too many images for this kind
            PermissionDeniedError: Media not owned, missing or already bound
        """
        policy = get_media_policy(model.kind)
        policy.check_count(len(specs))

        media_ids = [spec.media_id for spec in specs]
        if len(set(media_ids)) != len(media_ids):
            raise InvalidArgumentError(
                "The same image was submitted more than once",
                error_code="DUPLICATE_MEDIA",
            )
        for spec in specs:
            check_spec_location(spec, policy)

        with self.atomic():
            self.verifier.verify(user, media_ids)

            entity = model.objects.create(user=user, **fields)
            for index, spec in enumerate(specs):
                bind_media(user, entity, spec, index)

            refresh_media_summary(entity)

        self.get_logger().info(
            "Created %s with %d image(s)",
            model.kind,
            len(specs),
            extra={"entity_id": str(entity.id), "user_id": user.pk},
        )
        return entity
