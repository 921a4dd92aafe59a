"""
Cascade cleanup of entities and asynchronous storage deletion.

Metadata deletion is synchronous and transactional. Storage objects are
deleted by Celery tasks enqueued only after the deleting transaction
commits; enqueue and deletion failures are logged and never reach the
caller.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from django.db import transaction

from core.services import BaseService
from media.models import MediaObject
from media.services.locking import lock_owned_entity

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from django.contrib.auth.models import AbstractBaseUser

    from posts.models import ContentEntity

logger = logging.getLogger(__name__)


def _enqueue_storage_deletion(refs: list[str]) -> None:
    from media.tasks import delete_storage_objects

    delete_storage_objects.delay(refs)


def _deletion_callback(refs: list[str]):
    """Commit hook enqueueing deletion of one media's storage objects."""

    def enqueue_storage_deletion() -> None:
        _enqueue_storage_deletion(refs)

    return enqueue_storage_deletion


def schedule_storage_deletion(media_refs: Iterable[list[str]]) -> int:
    """
    Schedule storage deletion for removed media, one task per media.

    Args:
        media_refs: For each removed media, its storage refs

    Returns:
        Number of deletions scheduled
    """
    scheduled = 0
    for refs in media_refs:
        if not refs:
            continue
        transaction.on_commit(_deletion_callback(list(refs)), robust=True)
        scheduled += 1

    if scheduled:
        logger.debug("Scheduled storage deletion", extra={"count": scheduled})
    return scheduled


def collect_storage_refs(entity: ContentEntity) -> list[list[str]]:
    """Storage refs of every media bound to the entity or to its replies."""
    media = MediaObject.objects.filter(**entity.media_scope())
    if hasattr(entity, "replies"):
        media = media | MediaObject.objects.filter(**{f"reply__{entity.kind}": entity})
    return [
        [ref for ref in refs if ref]
        for refs in media.values_list("original_url", "thumbnail_url")
    ]


class CascadeCleanup(BaseService):
    """Deletes entities with their media and schedules storage cleanup."""

    def delete_entity(
        self,
        user: AbstractBaseUser,
        model: type[ContentEntity],
        entity_id: UUID,
    ) -> int:
        """
        Delete an owned entity and every media bound to it.

        Args:
            user: Caller that must own the entity
            model: Entity model class
            entity_id: Entity primary key

        Returns:
            Number of media whose storage deletion was scheduled

        Raises:
            NotFoundError: No such entity
            PermissionDeniedError: Caller is not the owner
        """
        with self.atomic():
            entity = lock_owned_entity(user, model, entity_id)
            media_refs = collect_storage_refs(entity)
            entity.delete()
            scheduled = schedule_storage_deletion(media_refs)

        self.get_logger().info(
            "Deleted %s",
            model.kind,
            extra={
                "entity_id": str(entity_id),
                "user_id": user.pk,
                "media_count": scheduled,
            },
        )
        return scheduled
