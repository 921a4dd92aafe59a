"""Per-entity locking shared by the binding, reconciliation and cleanup services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.exceptions import ConflictError, NotFoundError, PermissionDeniedError

if TYPE_CHECKING:
    from datetime import datetime
    from uuid import UUID

    from django.contrib.auth.models import AbstractBaseUser

    from posts.models import ContentEntity


def lock_owned_entity(
    user: AbstractBaseUser,
    model: type[ContentEntity],
    entity_id: UUID,
    expected_updated_at: datetime | None = None,
) -> ContentEntity:
    """
    Lock an entity row for the rest of the transaction and check ownership.

    Concurrent mutations of the same entity queue on this lock, so each
    one sees the committed result of the previous one.

    Args:
        user: Caller that must own the entity
        model: Entity model class
        entity_id: Entity primary key
        expected_updated_at: Optional precondition on the entity's updated_at

    Raises:
        NotFoundError: No such entity
        PermissionDeniedError: Caller is not the owner
        ConflictError: Entity changed since expected_updated_at
    """
    try:
        entity = model.objects.select_for_update().get(id=entity_id)
    except model.DoesNotExist:
        raise NotFoundError(
            f"{model._meta.verbose_name} not found",
            details={"id": str(entity_id)},
        ) from None

    if entity.user_id != user.pk:
        raise PermissionDeniedError(
            f"You do not own this {model._meta.verbose_name.lower()}",
        )

    if expected_updated_at is not None and entity.updated_at != expected_updated_at:
        raise ConflictError(
            f"{model._meta.verbose_name} was modified by another request",
            details={
                "expected_updated_at": expected_updated_at.isoformat(),
                "updated_at": entity.updated_at.isoformat(),
            },
        )

    return entity
