"""Django app configuration for media app."""

from django.apps import AppConfig


class MediaConfig(AppConfig):
    """
    Configuration for the media app.

    Builds the object storage collaborator once at startup. Views and
    tasks read it through media.storage.get_object_storage().
    """

    default_auto_field = "django.db.models.BigAutoField"
    name = "media"
    verbose_name = "Media"

    storage = None

    def ready(self) -> None:
        """Build infrastructure collaborators when app is ready."""
        from media.storage import build_object_storage

        self.storage = build_object_storage()
