# Generated manually for the initial posts schema

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import core.validators


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Record",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "main_image_url",
                    models.CharField(
                        blank=True,
                        help_text="Thumbnail ref of the media at display order 0",
                        max_length=1024,
                        null=True,
                    ),
                ),
                (
                    "media_count",
                    models.PositiveIntegerField(
                        default=0, help_text="Number of media bound to this entity"
                    ),
                ),
                (
                    "description",
                    models.TextField(help_text="Free text describing the record"),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Owner of this entity",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="posts_record_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Record",
                "verbose_name_plural": "Records",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Ask",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "main_image_url",
                    models.CharField(
                        blank=True,
                        help_text="Thumbnail ref of the media at display order 0",
                        max_length=1024,
                        null=True,
                    ),
                ),
                (
                    "media_count",
                    models.PositiveIntegerField(
                        default=0, help_text="Number of media bound to this entity"
                    ),
                ),
                (
                    "question",
                    models.TextField(help_text="Question asked about the area"),
                ),
                (
                    "center_lat",
                    models.FloatField(
                        validators=[core.validators.validate_latitude]
                    ),
                ),
                (
                    "center_lng",
                    models.FloatField(
                        validators=[core.validators.validate_longitude]
                    ),
                ),
                ("radius_meters", models.PositiveIntegerField(default=500)),
                (
                    "status",
                    models.CharField(
                        choices=[("ACTIVE", "Active"), ("RESOLVED", "Resolved")],
                        default="ACTIVE",
                        max_length=10,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Owner of this entity",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="posts_ask_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Ask",
                "verbose_name_plural": "Asks",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Reply",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for this record",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "main_image_url",
                    models.CharField(
                        blank=True,
                        help_text="Thumbnail ref of the media at display order 0",
                        max_length=1024,
                        null=True,
                    ),
                ),
                (
                    "media_count",
                    models.PositiveIntegerField(
                        default=0, help_text="Number of media bound to this entity"
                    ),
                ),
                ("content", models.TextField()),
                (
                    "is_onsite",
                    models.BooleanField(
                        default=False,
                        help_text="Reply media was captured inside the ask's radius",
                    ),
                ),
                (
                    "ask",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="replies",
                        to="posts.ask",
                    ),
                ),
                (
                    "record",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="replies",
                        to="posts.record",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Owner of this entity",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="posts_reply_set",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Reply",
                "verbose_name_plural": "Replies",
                "ordering": ["created_at"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("ask__isnull", True), ("record__isnull", False)),
                            models.Q(("ask__isnull", False), ("record__isnull", True)),
                            _connector="OR",
                        ),
                        name="reply_exactly_one_target",
                    )
                ],
            },
        ),
    ]
