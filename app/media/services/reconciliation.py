"""
Snapshot reconciler: converges an entity's media set to a target list.

The caller submits the full ordered list of media the entity should end
up with. Items are either EXISTING (already bound to this entity) or NEW
(PENDING uploads owned by the caller). The reconciler:

1. removes bound media missing from the target and schedules their
   storage objects for deletion once the transaction commits
2. binds NEW media
3. rewrites display orders to the target positions
4. recomputes main_image_url and media_count

Everything is validated, and NEW ids verified, before the first write.
Re-submitting the same list changes nothing: no deletions and no order
updates. A NEW id that is already bound to this entity (a retried
request) is kept as if it had been sent as EXISTING.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from django.utils import timezone

from core.exceptions import InvalidArgumentError
from core.services import BaseService
from media.models import MediaObject
from media.policies import get_media_policy
from media.services.binding import (
    BindSpec,
    bind_media,
    check_spec_location,
    refresh_media_summary,
)
from media.services.cleanup import schedule_storage_deletion
from media.services.locking import lock_owned_entity
from media.services.ownership import OwnershipVerifier

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from django.contrib.auth.models import AbstractBaseUser

    from posts.models import ContentEntity


@dataclass(frozen=True)
class TargetItem:
    """One entry of a target media list."""

    EXISTING = "EXISTING"
    NEW = "NEW"

    type: str
    media_id: UUID
    spec: BindSpec | None = None

    @classmethod
    def existing(cls, media_id: UUID) -> TargetItem:
        return cls(type=cls.EXISTING, media_id=media_id)

    @classmethod
    def new(cls, spec: BindSpec) -> TargetItem:
        return cls(type=cls.NEW, media_id=spec.media_id, spec=spec)


@dataclass(frozen=True)
class ReconcileResult:
    """Counts describing what a reconciliation changed."""

    added: int
    removed: int
    reordered: int


class SnapshotReconciler(BaseService):
    """Applies remove/keep/add diffs to an entity's bound media."""

    def __init__(self, verifier: OwnershipVerifier | None = None) -> None:
        self.verifier = verifier or OwnershipVerifier()

    def update_media(
        self,
        user: AbstractBaseUser,
        model: type[ContentEntity],
        entity_id: UUID,
        target: Sequence[TargetItem],
        expected_updated_at: datetime | None = None,
    ) -> ContentEntity:
        """
        Lock an entity and reconcile its media to the target list.

        Raises:
            NotFoundError: No such entity
            PermissionDeniedError: Not the owner, or a NEW id fails verification
            ConflictError: expected_updated_at does not match
            InvalidArgumentError: Bad target list
            ResourceExhaustedError: Too many images
        """
        with self.atomic():
            entity = lock_owned_entity(user, model, entity_id, expected_updated_at)
            self.reconcile(user, entity, target)
        return entity

    def reconcile(
        self,
        user: AbstractBaseUser,
        entity: ContentEntity,
        target: Sequence[TargetItem],
    ) -> ReconcileResult:
        """
        Reconcile an already locked entity. Must run inside a transaction.

        Args:
            user: Entity owner
            entity: Locked entity
            target: Ordered target media list

        Returns:
            ReconcileResult with change counts
        """
        policy = get_media_policy(entity.kind)

        target_ids = [item.media_id for item in target]
        if len(set(target_ids)) != len(target_ids):
            raise InvalidArgumentError(
                "The same image was submitted more than once",
                error_code="DUPLICATE_MEDIA",
            )
        policy.check_count(len(target))

        current = {
            media.id: media
            for media in MediaObject.objects.select_for_update().filter(
                **entity.media_scope()
            )
        }

        new_items = []
        for item in target:
            if item.type == TargetItem.EXISTING:
                if item.media_id not in current:
                    raise InvalidArgumentError(
                        "Image is not attached to this entity",
                        error_code="MEDIA_NOT_BOUND",
                        details={"media_id": str(item.media_id)},
                    )
            elif item.type == TargetItem.NEW:
                if item.media_id not in current:
                    check_spec_location(item.spec, policy)
                    new_items.append(item)
            else:
                raise InvalidArgumentError(f"Unknown image type: {item.type}")

        self.verifier.verify(user, [item.media_id for item in new_items])

        # Remove
        keep_ids = set(target_ids)
        removed = [media for media_id, media in current.items() if media_id not in keep_ids]
        if removed:
            MediaObject.objects.filter(id__in=[media.id for media in removed]).delete()
            schedule_storage_deletion([media.storage_refs for media in removed])

        # Free the slots of retained media whose position changes
        moved = {
            item.media_id: index
            for index, item in enumerate(target)
            if item.media_id in current and current[item.media_id].display_order != index
        }
        if moved:
            MediaObject.objects.filter(id__in=list(moved)).update(display_order=None)
            now = timezone.now()
            for media_id, index in moved.items():
                MediaObject.objects.filter(id=media_id).update(
                    display_order=index, updated_at=now
                )

        # Add
        new_positions = {item.media_id: index for index, item in enumerate(target)}
        for item in new_items:
            bind_media(user, entity, item.spec, new_positions[item.media_id])

        refresh_media_summary(entity)

        result = ReconcileResult(
            added=len(new_items), removed=len(removed), reordered=len(moved)
        )
        self.get_logger().info(
            "Reconciled %s media",
            entity.kind,
            extra={
                "entity_id": str(entity.id),
                "added": result.added,
                "removed": result.removed,
                "reordered": result.reordered,
            },
        )
        return result
