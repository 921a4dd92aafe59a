"""
Content entity models: Record, Ask and Reply.

Every entity is owned by one user and owns zero or more bound
MediaObjects (media.MediaObject). The entity keeps two derived fields
that the media services maintain:

- main_image_url: thumbnail ref of the media at display order 0
- media_count: number of bound media

Replies hang off exactly one Record or Ask and are deleted with it.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models

from core.model_mixins import UUIDPrimaryKeyMixin
from core.models import BaseModel
from core.validators import validate_latitude, validate_longitude


class EntityKind(models.TextChoices):
    """Discriminator for the entity a MediaObject is bound to."""

    RECORD = "record", "Record"
    ASK = "ask", "Ask"
    REPLY = "reply", "Reply"

    @property
    def model(self) -> type[ContentEntity]:
        return {
            EntityKind.RECORD: Record,
            EntityKind.ASK: Ask,
            EntityKind.REPLY: Reply,
        }[self]

    @classmethod
    def of(cls, entity: ContentEntity) -> EntityKind:
        return cls(entity.kind)


class ContentEntity(UUIDPrimaryKeyMixin, BaseModel):
    """
    Abstract base for user-authored content that owns media.

    Subclasses set ``kind`` to their EntityKind; the value doubles as the
    name of the MediaObject foreign key pointing at them.
    """

    kind: str = ""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="%(app_label)s_%(class)s_set",
        help_text="Owner of this entity",
    )
    main_image_url = models.CharField(
        max_length=1024,
        null=True,
        blank=True,
        help_text="Thumbnail ref of the media at display order 0",
    )
    media_count = models.PositiveIntegerField(
        default=0,
        help_text="Number of media bound to this entity",
    )

    class Meta(BaseModel.Meta):
        abstract = True

    def media_scope(self) -> dict[str, ContentEntity]:
        """Filter kwargs selecting the MediaObjects bound to this entity."""
        return {self.kind: self}


class Record(ContentEntity):
    """A geolocated photo record. Every image carries a location."""

    kind = EntityKind.RECORD.value

    description = models.TextField(help_text="Free text describing the record")

    class Meta(ContentEntity.Meta):
        verbose_name = "Record"
        verbose_name_plural = "Records"


class Ask(ContentEntity):
    """A question pinned to a circular area on the map."""

    kind = EntityKind.ASK.value

    class Status(models.TextChoices):
        ACTIVE = "ACTIVE", "Active"
        RESOLVED = "RESOLVED", "Resolved"

    question = models.TextField(help_text="Question asked about the area")
    center_lat = models.FloatField(validators=[validate_latitude])
    center_lng = models.FloatField(validators=[validate_longitude])
    radius_meters = models.PositiveIntegerField(default=500)
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
    )

    class Meta(ContentEntity.Meta):
        verbose_name = "Ask"
        verbose_name_plural = "Asks"


class Reply(ContentEntity):
    """A reply to exactly one Record or Ask."""

    kind = EntityKind.REPLY.value

    record = models.ForeignKey(
        Record,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="replies",
    )
    ask = models.ForeignKey(
        Ask,
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name="replies",
    )
    content = models.TextField()
    is_onsite = models.BooleanField(
        default=False,
        help_text="Reply media was captured inside the ask's radius",
    )

    class Meta(ContentEntity.Meta):
        verbose_name = "Reply"
        verbose_name_plural = "Replies"
        ordering = ["created_at"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    models.Q(record__isnull=False, ask__isnull=True)
                    | models.Q(record__isnull=True, ask__isnull=False)
                ),
                name="reply_exactly_one_target",
            ),
        ]
