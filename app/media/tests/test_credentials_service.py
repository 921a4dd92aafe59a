"""
Tests for the credential issuer.

Tests cover:
- One credential per descriptor, keyed by client_key, with distinct ids
- Rows created PENDING and unbound
- Batch validation (empty, too large, duplicate keys, type, size)
- All-or-nothing persistence
"""

from __future__ import annotations

import pytest
from django.db import DatabaseError

from core.exceptions import (
    InternalError,
    InvalidArgumentError,
    ResourceExhaustedError,
)
from media.models import MediaObject
from media.services import CredentialIssuer, UploadDescriptor


def descriptors(count, content_type="image/jpeg", size=1024):
    return [
        UploadDescriptor(client_key=f"img-{i}", content_type=content_type, size=size)
        for i in range(count)
    ]


@pytest.fixture
def issuer(fake_storage):
    return CredentialIssuer(fake_storage)


@pytest.mark.django_db
class TestIssueCredentials:
    """Tests for successful issuance."""

    def test_returns_one_entry_per_client_key(self, issuer, user):
        """Test N descriptors give N entries keyed by client_key."""
        credentials = issuer.issue(user, descriptors(4))

        assert set(credentials) == {"img-0", "img-1", "img-2", "img-3"}

    def test_media_ids_are_distinct(self, issuer, user):
        """Test every image gets its own media id."""
        credentials = issuer.issue(user, descriptors(5))

        media_ids = {credential.media_id for credential in credentials.values()}
        assert len(media_ids) == 5

    def test_rows_are_pending_and_unbound(self, issuer, user):
        """Test issued media start PENDING with no parent."""
        credentials = issuer.issue(user, descriptors(3))

        for client_key, credential in credentials.items():
            media = MediaObject.objects.get(id=credential.media_id)
            assert media.status == MediaObject.Status.PENDING
            assert media.parent_ref is None
            assert media.user == user
            assert media.client_key == client_key

    def test_refs_match_storage_keys(self, issuer, user, fake_storage):
        """Test public refs and grants follow the key scheme."""
        credentials = issuer.issue(
            user, [UploadDescriptor(client_key="a", content_type="image/png")]
        )

        credential = credentials["a"]
        prefix = f"images/{user.pk}/{credential.media_id}"
        assert credential.original_public_url == f"https://cdn.test/{prefix}_original.png"
        assert credential.thumbnail_public_url == f"https://cdn.test/{prefix}_thumbnail.jpg"

        media = MediaObject.objects.get(id=credential.media_id)
        assert media.original_url == credential.original_public_url
        assert media.thumbnail_url == credential.thumbnail_public_url

    def test_grants_use_declared_types_and_ttl(self, issuer, user, fake_storage, settings):
        """Test original grant uses the declared type, thumbnail uses JPEG."""
        settings.MEDIA_UPLOAD_GRANT_TTL_SECONDS = 600

        issuer.issue(user, [UploadDescriptor(client_key="a", content_type="image/webp")])

        grants = sorted(fake_storage.grants)
        assert [(content_type, ttl) for _, content_type, ttl in grants] == [
            ("image/webp", 600),
            ("image/jpeg", 600),
        ]

    def test_credential_includes_expiry(self, issuer, user, settings):
        settings.MEDIA_UPLOAD_GRANT_TTL_SECONDS = 900

        credentials = issuer.issue(user, descriptors(1))

        assert credentials["img-0"].expires_in == 900


@pytest.mark.django_db
class TestIssueValidation:
    """Tests for batch validation."""

    def test_empty_batch_rejected(self, issuer, user):
        with pytest.raises(InvalidArgumentError):
            issuer.issue(user, [])

    def test_oversized_batch_reports_limit(self, issuer, user, settings):
        """Test too many images raises with limit and actual."""
        settings.MEDIA_UPLOAD_MAX_BATCH = 10

        with pytest.raises(ResourceExhaustedError) as exc_info:
            issuer.issue(user, descriptors(11))

        assert exc_info.value.details["limit"] == 10
        assert exc_info.value.details["actual"] == 11
        assert MediaObject.objects.count() == 0

    def test_duplicate_client_key_rejected(self, issuer, user):
        batch = [
            UploadDescriptor(client_key="same", content_type="image/jpeg"),
            UploadDescriptor(client_key="same", content_type="image/png"),
        ]

        with pytest.raises(InvalidArgumentError) as exc_info:
            issuer.issue(user, batch)

        assert exc_info.value.error_code == "DUPLICATE_CLIENT_KEY"

    def test_disallowed_mime_type_rejected(self, issuer, user):
        with pytest.raises(InvalidArgumentError) as exc_info:
            issuer.issue(user, descriptors(1, content_type="image/gif"))

        assert exc_info.value.error_code == "UNSUPPORTED_MIME_TYPE"
        assert MediaObject.objects.count() == 0

    def test_oversized_file_reports_limit(self, issuer, user, settings):
        settings.MEDIA_UPLOAD_MAX_FILE_SIZE = 1000

        with pytest.raises(ResourceExhaustedError) as exc_info:
            issuer.issue(user, descriptors(1, size=1001))

        assert exc_info.value.details == {"limit": 1000, "actual": 1001}

    def test_size_is_optional(self, issuer, user):
        credentials = issuer.issue(user, descriptors(1, size=None))

        assert "img-0" in credentials


@pytest.mark.django_db
class TestIssueFailures:
    """Tests for all-or-nothing behaviour."""

    def test_storage_failure_creates_no_rows(self, issuer, user, fake_storage):
        """Test a grant failure aborts the batch before persisting."""
        fake_storage.fail_grants = True

        with pytest.raises(InternalError):
            issuer.issue(user, descriptors(3))

        assert MediaObject.objects.count() == 0

    def test_database_failure_creates_no_rows(self, issuer, user, mocker):
        """Test a persistence failure raises InternalError with nothing saved."""
        mocker.patch.object(
            MediaObject.objects, "bulk_create", side_effect=DatabaseError("down")
        )

        with pytest.raises(InternalError):
            issuer.issue(user, descriptors(3))

        assert MediaObject.objects.count() == 0
