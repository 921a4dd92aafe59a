"""
Per-entity-kind media policies.

Policies come from settings.ENTITY_MEDIA_POLICIES:

    ENTITY_MEDIA_POLICIES = {
        "record": {"min_items": 1, "max_items": 10, "require_location": True},
        "ask": {"min_items": 0, "max_items": 5, "require_location": False},
        "reply": {"min_items": 0, "max_items": 5, "require_location": False},
    }
"""

from __future__ import annotations

from dataclasses import dataclass

from django.conf import settings

from core.exceptions import InvalidArgumentError, ResourceExhaustedError


@dataclass(frozen=True)
class MediaPolicy:
    """Count bounds and location requirement for one entity kind."""

    kind: str
    min_items: int = 0
    max_items: int = 10
    require_location: bool = False

    def check_count(self, count: int) -> None:
        """
        Validate the number of media submitted for one entity.

        Raises:
            InvalidArgumentError: Fewer items than the minimum
            ResourceExhaustedError: More items than the maximum
        """
        if count > self.max_items:
            raise ResourceExhaustedError(
                f"A {self.kind} can have at most {self.max_items} images",
                limit=self.max_items,
                actual=count,
            )
        if count < self.min_items:
            raise InvalidArgumentError(
                f"A {self.kind} needs at least {self.min_items} image(s)",
                error_code="TOO_FEW_IMAGES",
                details={"limit": self.min_items, "actual": count},
            )


def get_media_policy(kind: str) -> MediaPolicy:
    """Look up the media policy for an entity kind."""
    try:
        options = settings.ENTITY_MEDIA_POLICIES[kind]
    except KeyError:
        raise InvalidArgumentError(f"Unknown entity kind: {kind}") from None
    return MediaPolicy(kind=kind, **options)
