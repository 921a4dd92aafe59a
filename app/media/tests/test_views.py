"""
Tests for media API views.

Tests cover:
- POST /api/v1/upload/request success and error responses
"""

from __future__ import annotations

import pytest
from rest_framework import status
from rest_framework.test import APIRequestFactory, force_authenticate

from media.models import MediaObject
from media.tests.fakes import InMemoryObjectStorage
from media.views import UploadRequestView

UPLOAD_URL = "/api/v1/upload/request"


@pytest.mark.django_db
class TestUploadRequestView:
    """Tests for UploadRequestView."""

    def test_issues_credentials(self, authenticated_client, user, fake_storage):
        """Test credentials come back keyed by client_key."""
        response = authenticated_client.post(
            UPLOAD_URL,
            {
                "image_requests": [
                    {"client_key": "a", "file_type": "image/jpeg", "file_size": 2048},
                    {"client_key": "b", "file_type": "image/png"},
                ]
            },
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        credentials = response.data["upload_credentials"]
        assert set(credentials) == {"a", "b"}
        for credential in credentials.values():
            assert set(credential) == {
                "upload_id",
                "original_upload_url",
                "thumbnail_upload_url",
                "original_public_url",
                "thumbnail_public_url",
                "expires_in",
            }
        assert MediaObject.objects.filter(user=user, status="PENDING").count() == 2

    def test_requires_authentication(self, api_client, fake_storage):
        response = api_client.post(
            UPLOAD_URL,
            {"image_requests": [{"client_key": "a", "file_type": "image/jpeg"}]},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_payload(self, authenticated_client, fake_storage):
        """Test payload errors use the application error shape."""
        response = authenticated_client.post(
            UPLOAD_URL, {"image_requests": [{"file_type": "image/jpeg"}]}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "VALIDATION_ERROR"
        assert "fields" in response.data["details"]

    def test_empty_batch(self, authenticated_client, fake_storage):
        response = authenticated_client.post(
            UPLOAD_URL, {"image_requests": []}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_ARGUMENT"

    def test_unsupported_type(self, authenticated_client, fake_storage):
        response = authenticated_client.post(
            UPLOAD_URL,
            {"image_requests": [{"client_key": "a", "file_type": "application/pdf"}]},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "UNSUPPORTED_MIME_TYPE"

    def test_batch_limit_reports_limit_and_actual(self, authenticated_client, fake_storage, settings):
        settings.MEDIA_UPLOAD_MAX_BATCH = 2
        payload = {
            "image_requests": [
                {"client_key": str(i), "file_type": "image/jpeg"} for i in range(3)
            ]
        }

        response = authenticated_client.post(UPLOAD_URL, payload, format="json")

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.data["error_code"] == "RESOURCE_EXHAUSTED"
        assert response.data["details"] == {"limit": 2, "actual": 3}

    def test_uses_injected_storage(self, user):
        """Test a storage passed to as_view() receives the grant requests."""
        storage = InMemoryObjectStorage()
        view = UploadRequestView.as_view(storage=storage)
        request = APIRequestFactory().post(
            UPLOAD_URL,
            {"image_requests": [{"client_key": "a", "file_type": "image/webp"}]},
            format="json",
        )
        force_authenticate(request, user=user)

        response = view(request)

        assert response.status_code == status.HTTP_200_OK
        assert len(storage.grants) == 2
