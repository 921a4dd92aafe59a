"""
URL configuration for media app.

API Documentation Groups (following [App Name] - [Group Name] pattern):

Media - Upload:
    POST /upload/request    - Issue presigned upload URLs
"""

from django.urls import path

from media.views import UploadRequestView

app_name = "media"

urlpatterns = [
    path("upload/request", UploadRequestView.as_view(), name="upload-request"),
]
