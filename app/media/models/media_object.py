"""
MediaObject model for images uploaded straight to object storage.

Lifecycle:
    PENDING    Created by the credential issuer together with the write
               grants. Bound to nothing.
    COMPLETED  Bound to exactly one Record, Ask or Reply with a display
               order inside that entity.

A MediaObject never moves between entities. Removing it from an entity
deletes the row and schedules its storage objects for deletion.

Storage layout:
    images/{owner_id}/{media_id}_original.{ext}
    images/{owner_id}/{media_id}_thumbnail.jpg
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel

BOUND_TO_RECORD = Q(record__isnull=False, ask__isnull=True, reply__isnull=True)
BOUND_TO_ASK = Q(record__isnull=True, ask__isnull=False, reply__isnull=True)
BOUND_TO_REPLY = Q(record__isnull=True, ask__isnull=True, reply__isnull=False)
UNBOUND = Q(record__isnull=True, ask__isnull=True, reply__isnull=True)


class MediaObject(UUIDPrimaryKeyMixin, BaseModel):
    """
    One uploaded image and where it is bound.

    Attributes:
        user: Owner. Never changes after creation.
        client_key: Caller correlation token from the issuance batch.
        status: PENDING until bound, COMPLETED afterwards.
        content_type: MIME type declared for the original upload.
        original_url: Public read ref of the original variant.
        thumbnail_url: Public read ref of the thumbnail variant.
        lat, lng: Optional capture location.
        captured_at: Optional capture timestamp.
        address: Optional human-readable address.
        display_order: Position inside the bound entity (0 is the main image).
        record, ask, reply: Parent entity. At most one is set.
    """

    # =========================================================================
    # Enums
    # =========================================================================

    class Status(models.TextChoices):
        """Upload lifecycle states."""

        PENDING = "PENDING", "Pending"
        COMPLETED = "COMPLETED", "Completed"

    class Variant(models.TextChoices):
        """Stored variants of every image."""

        ORIGINAL = "original", "Original"
        THUMBNAIL = "thumbnail", "Thumbnail"

    # =========================================================================
    # Fields
    # =========================================================================

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="media_objects",
        help_text="User who requested the upload",
    )
    client_key = models.CharField(
        max_length=128,
        help_text="Caller correlation token, unique within one issuance batch",
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.PENDING,
        db_index=True,
    )
    content_type = models.CharField(
        max_length=64,
        help_text="MIME type declared for the original upload",
    )
    original_url = models.CharField(max_length=1024)
    thumbnail_url = models.CharField(max_length=1024)

    lat = models.FloatField(null=True, blank=True)
    lng = models.FloatField(null=True, blank=True)
    captured_at = models.DateTimeField(null=True, blank=True)
    address = models.CharField(max_length=512, null=True, blank=True)

    display_order = models.PositiveIntegerField(null=True, blank=True)

    record = models.ForeignKey(
        "posts.Record",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="media",
    )
    ask = models.ForeignKey(
        "posts.Ask",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="media",
    )
    reply = models.ForeignKey(
        "posts.Reply",
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="media",
    )

    # =========================================================================
    # Meta
    # =========================================================================

    class Meta:
        verbose_name = "Media Object"
        verbose_name_plural = "Media Objects"
        ordering = ["display_order", "created_at"]

        constraints = [
            # PENDING rows are unbound; COMPLETED rows are bound to exactly one entity
            models.CheckConstraint(
                condition=(
                    (Q(status="PENDING") & UNBOUND)
                    | (
                        Q(status="COMPLETED")
                        & (BOUND_TO_RECORD | BOUND_TO_ASK | BOUND_TO_REPLY)
                    )
                ),
                name="media_object_status_matches_parent",
            ),
            models.UniqueConstraint(
                fields=["record", "display_order"],
                condition=Q(record__isnull=False),
                name="media_object_unique_order_per_record",
            ),
            models.UniqueConstraint(
                fields=["ask", "display_order"],
                condition=Q(ask__isnull=False),
                name="media_object_unique_order_per_ask",
            ),
            models.UniqueConstraint(
                fields=["reply", "display_order"],
                condition=Q(reply__isnull=False),
                name="media_object_unique_order_per_reply",
            ),
        ]

        indexes = [
            models.Index(fields=["user", "status"], name="idx_media_owner_status"),
        ]

    # =========================================================================
    # Methods
    # =========================================================================

    def __str__(self) -> str:
        return f"MediaObject({self.id}, {self.status})"

    @property
    def parent_ref(self) -> tuple[str, object] | None:
        """Return (kind, entity_id) of the bound entity, or None."""
        for kind in ("record", "ask", "reply"):
            parent_id = getattr(self, f"{kind}_id")
            if parent_id is not None:
                return kind, parent_id
        return None

    @property
    def storage_refs(self) -> list[str]:
        """Public refs of every stored variant."""
        return [ref for ref in (self.original_url, self.thumbnail_url) if ref]

    @property
    def location(self) -> dict[str, float] | None:
        if self.lat is None or self.lng is None:
            return None
        return {"lat": self.lat, "lng": self.lng}
