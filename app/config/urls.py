"""
URL configuration for the Django application.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/upload/request         - Issue presigned upload URLs (POST)
    /api/v1/records/               - Create record (POST)
        map/                       - Record images in a bounding box (GET)
        {id}/                      - Detail/edit/delete (GET/PATCH/DELETE)
    /api/v1/asks/                  - Create ask (POST)
        map/                       - Asks of the last 48 hours in a bounding box (GET)
        {id}/                      - Detail/edit/delete (GET/PATCH/DELETE)
    /api/v1/replies/               - List by record_id/ask_id (GET), create (POST)
        {id}/                      - Detail/edit/delete (GET/PATCH/DELETE)

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Media
    path("", include("media.urls")),
    # Records, asks, replies
    path("", include("posts.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Geolocated Media Admin"
admin.site.site_title = "Admin Portal"
admin.site.index_title = "Welcome to the Admin Portal"
