# =============================================================================
# geomedia backend configuration
# =============================================================================
# Settings, URL routing, ASGI/WSGI entry points and the Celery app that
# runs storage cleanup. Importing the Celery app here lets Django-side code
# enqueue media.tasks without importing config.celery directly.
# =============================================================================

from config.celery import app as celery_app

__all__ = ("celery_app",)
