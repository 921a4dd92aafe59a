"""Ownership verification for media about to be bound."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import PermissionDeniedError
from core.services import BaseService
from media.models import MediaObject
from media.models.media_object import UNBOUND

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from django.contrib.auth.models import AbstractBaseUser


class OwnershipVerifier(BaseService):
    """
    Confirms the caller owns a set of PENDING, unbound media.

    Missing ids and ids owned by someone else are reported the same way,
    so callers cannot probe for the existence of other users' uploads.
    Call inside a transaction: matching rows are locked until commit.
    """

    def verify(
        self,
        user: AbstractBaseUser,
        media_ids: Iterable[UUID],
    ) -> dict[UUID, MediaObject]:
        """
        Verify and lock the given media.

        Args:
            user: Caller that must own every media
            media_ids: Ids to verify; duplicates fail verification

        Returns:
            Map of media id to locked MediaObject

        Raises:
            PermissionDeniedError: Any id missing, not owned or not PENDING
        """
        media_ids = list(media_ids)
        if not media_ids:
            return {}

        found = {
            media.id: media
            for media in MediaObject.objects.select_for_update().filter(
                UNBOUND,
                id__in=media_ids,
                user=user,
                status=MediaObject.Status.PENDING,
            )
        }

        if len(found) != len(media_ids):
            self.get_logger().info(
                "Media ownership verification failed",
                extra={
                    "user_id": user.pk,
                    "requested": len(media_ids),
                    "matched": len(found),
                },
            )
            raise PermissionDeniedError(
                "One or more images are not available to you",
                error_code="MEDIA_NOT_OWNED",
            )

        return found
