"""Django admin configuration for media app."""

from django.contrib import admin

from media.models import MediaObject


@admin.register(MediaObject)
class MediaObjectAdmin(admin.ModelAdmin):
    """Admin configuration for MediaObject model."""

    list_display = [
        "id",
        "user",
        "client_key",
        "status",
        "content_type",
        "display_order",
        "created_at",
    ]
    list_filter = ["status", "content_type"]
    search_fields = ["id", "client_key", "user__username", "user__email"]
    readonly_fields = [
        "id",
        "user",
        "client_key",
        "original_url",
        "thumbnail_url",
        "created_at",
        "updated_at",
    ]
    raw_id_fields = ["record", "ask", "reply"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]
