"""
Posts service layer.

Create, edit and delete for the three content entity kinds. Media work
is delegated to the media services:

    create  -> EntityBinder
    update  -> SnapshotReconciler (when a target image list is given)
    delete  -> CascadeCleanup

Every mutation holds the entity's row lock for its whole transaction.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from core.exceptions import InvalidArgumentError, NotFoundError
from core.services import BaseService
from media.models import MediaObject
from media.services import CascadeCleanup, EntityBinder, SnapshotReconciler
from media.services.locking import lock_owned_entity
from posts.geo import GeoQuery
from posts.models import Ask, Record, Reply

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime
    from uuid import UUID

    from django.contrib.auth.models import AbstractBaseUser
    from django.db.models import QuerySet

    from media.services import BindSpec, TargetItem
    from posts.models import ContentEntity


class ContentEntityService(BaseService):
    """
    Generic create/update/delete for one entity kind.

    Subclasses set ``model`` and ``editable_fields`` and may override
    ``after_media_change`` to maintain fields derived from the media.
    """

    model: type[ContentEntity]
    editable_fields: tuple[str, ...] = ()

    def __init__(
        self,
        binder: EntityBinder | None = None,
        reconciler: SnapshotReconciler | None = None,
        cleanup: CascadeCleanup | None = None,
    ) -> None:
        self.binder = binder or EntityBinder()
        self.reconciler = reconciler or SnapshotReconciler()
        self.cleanup = cleanup or CascadeCleanup()

    def get(self, entity_id: UUID) -> ContentEntity:
        try:
            return self.model.objects.prefetch_related("media").get(id=entity_id)
        except self.model.DoesNotExist:
            raise NotFoundError(
                f"{self.model._meta.verbose_name} not found",
                details={"id": str(entity_id)},
            ) from None

    def create(
        self,
        user: AbstractBaseUser,
        fields: dict[str, Any],
        images: Sequence[BindSpec],
    ) -> ContentEntity:
        """Create an entity with its ordered images."""
        with self.atomic():
            entity = self.binder.create(user, self.model, fields, images)
            self.after_media_change(entity)
        return entity

    def update(
        self,
        user: AbstractBaseUser,
        entity_id: UUID,
        fields: dict[str, Any],
        target: Sequence[TargetItem] | None = None,
        expected_updated_at: datetime | None = None,
    ) -> ContentEntity:
        """
        Edit entity fields and, optionally, its image set.

        Without expected_updated_at the last writer wins.

        Raises:
            NotFoundError, PermissionDeniedError, ConflictError,
            InvalidArgumentError, ResourceExhaustedError
        """
        unknown = set(fields) - set(self.editable_fields)
        if unknown:
            raise InvalidArgumentError(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}"
            )

        with self.atomic():
            entity = lock_owned_entity(user, self.model, entity_id, expected_updated_at)

            if fields:
                for name, value in fields.items():
                    setattr(entity, name, value)
                entity.save(update_fields=[*fields, "updated_at"])

            if target is not None:
                self.reconciler.reconcile(user, entity, target)
                self.after_media_change(entity)

        self.get_logger().info(
            "Updated %s",
            self.model.kind,
            extra={
                "entity_id": str(entity.id),
                "fields": sorted(fields),
                "media_changed": target is not None,
            },
        )
        return entity

    def list_owned(self, user: AbstractBaseUser) -> QuerySet[ContentEntity]:
        """Entities owned by user, newest first."""
        return (
            self.model.objects.filter(user=user)
            .prefetch_related("media")
            .order_by("-created_at")
        )

    def delete(self, user: AbstractBaseUser, entity_id: UUID) -> None:
        """Delete an entity; storage cleanup happens after commit."""
        self.cleanup.delete_entity(user, self.model, entity_id)

    def after_media_change(self, entity: ContentEntity) -> None:
        """Hook run inside the transaction after the media set changed."""


class RecordService(ContentEntityService):
    model = Record
    editable_fields = ("description",)


class AskService(ContentEntityService):
    model = Ask
    editable_fields = ("question", "status", "radius_meters")


class ReplyService(ContentEntityService):
    """Replies target exactly one Record or Ask."""

    model = Reply
    editable_fields = ("content",)

    def __init__(self, *args: Any, geo: GeoQuery | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.geo = geo or GeoQuery()

    def resolve_target(
        self,
        record_id: UUID | None = None,
        ask_id: UUID | None = None,
    ) -> dict[str, ContentEntity]:
        """
        Look up the reply target.

        Raises:
            InvalidArgumentError: Not exactly one of record_id/ask_id
            NotFoundError: Target does not exist
        """
        if (record_id is None) == (ask_id is None):
            raise InvalidArgumentError("Provide exactly one of record_id or ask_id")

        model, target_id, field = (
            (Record, record_id, "record") if record_id else (Ask, ask_id, "ask")
        )
        try:
            return {field: model.objects.get(id=target_id)}
        except model.DoesNotExist:
            raise NotFoundError(
                f"{model._meta.verbose_name} not found",
                details={"id": str(target_id)},
            ) from None

    def after_media_change(self, entity: Reply) -> None:
        is_onsite = self.compute_is_onsite(entity)
        if entity.is_onsite != is_onsite:
            entity.is_onsite = is_onsite
            entity.save(update_fields=["is_onsite", "updated_at"])

    def compute_is_onsite(self, reply: Reply) -> bool:
        """True when any located reply image lies inside the ask's radius."""
        if reply.ask_id is None:
            return False
        ask = reply.ask
        located = MediaObject.objects.filter(
            reply=reply, lat__isnull=False, lng__isnull=False
        ).values_list("lat", "lng")
        return any(self.geo.is_within_radius(ask, lat, lng) for lat, lng in located)
