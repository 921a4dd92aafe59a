"""Django admin configuration for posts app."""

from django.contrib import admin

from posts.models import Ask, Record, Reply


class ContentEntityAdmin(admin.ModelAdmin):
    """Shared admin options for content entities."""

    list_filter = ["created_at"]
    readonly_fields = ["id", "main_image_url", "media_count", "created_at", "updated_at"]
    raw_id_fields = ["user"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]


@admin.register(Record)
class RecordAdmin(ContentEntityAdmin):
    list_display = ["id", "user", "media_count", "created_at"]
    search_fields = ["description", "user__username"]


@admin.register(Ask)
class AskAdmin(ContentEntityAdmin):
    list_display = ["id", "user", "status", "radius_meters", "media_count", "created_at"]
    list_filter = ["status", "created_at"]
    search_fields = ["question", "user__username"]


@admin.register(Reply)
class ReplyAdmin(ContentEntityAdmin):
    list_display = ["id", "user", "record", "ask", "is_onsite", "created_at"]
    list_filter = ["is_onsite", "created_at"]
    search_fields = ["content", "user__username"]
    raw_id_fields = ["user", "record", "ask"]
