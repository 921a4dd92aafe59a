"""
WSGI entry point for the geomedia API.

Used by gunicorn-style deployments; the ASGI entry point in config.asgi
serves the same application.
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
