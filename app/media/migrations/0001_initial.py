# Generated manually for the initial media schema

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("posts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="MediaObject",
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
                    "client_key",
                    models.CharField(
                        help_text="Caller correlation token, unique within one issuance batch",
                        max_length=128,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[("PENDING", "Pending"), ("COMPLETED", "Completed")],
                        db_index=True,
                        default="PENDING",
                        max_length=10,
                    ),
                ),
                (
                    "content_type",
                    models.CharField(
                        help_text="MIME type declared for the original upload",
                        max_length=64,
                    ),
                ),
                ("original_url", models.CharField(max_length=1024)),
                ("thumbnail_url", models.CharField(max_length=1024)),
                ("lat", models.FloatField(blank=True, null=True)),
                ("lng", models.FloatField(blank=True, null=True)),
                ("captured_at", models.DateTimeField(blank=True, null=True)),
                ("address", models.CharField(blank=True, max_length=512, null=True)),
                ("display_order", models.PositiveIntegerField(blank=True, null=True)),
                (
                    "ask",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media",
                        to="posts.ask",
                    ),
                ),
                (
                    "record",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media",
                        to="posts.record",
                    ),
                ),
                (
                    "reply",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media",
                        to="posts.reply",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User who requested the upload",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="media_objects",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Media Object",
                "verbose_name_plural": "Media Objects",
                "ordering": ["display_order", "created_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "status"], name="idx_media_owner_status"
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(
                                ("status", "PENDING"),
                                models.Q(
                                    ("record__isnull", True),
                                    ("ask__isnull", True),
                                    ("reply__isnull", True),
                                ),
                            ),
                            models.Q(
                                ("status", "COMPLETED"),
                                models.Q(
                                    models.Q(
                                        ("record__isnull", False),
                                        ("ask__isnull", True),
                                        ("reply__isnull", True),
                                    ),
                                    models.Q(
                                        ("record__isnull", True),
                                        ("ask__isnull", False),
                                        ("reply__isnull", True),
                                    ),
                                    models.Q(
                                        ("record__isnull", True),
                                        ("ask__isnull", True),
                                        ("reply__isnull", False),
                                    ),
                                    _connector="OR",
                                ),
                            ),
                            _connector="OR",
                        ),
                        name="media_object_status_matches_parent",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("record__isnull", False)),
                        fields=("record", "display_order"),
                        name="media_object_unique_order_per_record",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("ask__isnull", False)),
                        fields=("ask", "display_order"),
                        name="media_object_unique_order_per_ask",
                    ),
                    models.UniqueConstraint(
                        condition=models.Q(("reply__isnull", False)),
                        fields=("reply", "display_order"),
                        name="media_object_unique_order_per_reply",
                    ),
                ],
            },
        ),
    ]
