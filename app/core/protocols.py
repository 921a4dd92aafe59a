"""
Protocol definitions for infrastructure collaborators.

Protocols define contracts that collaborators must fulfill, enabling:
- Duck typing with static type checking
- Dependency inversion (depend on abstractions, not concretions)
- Easy fakes in tests

Available Protocols:
    ObjectStorage: Write grants, public read references and deletion
                   for an object store (S3, R2, ...)

Usage:
    from core.protocols import ObjectStorage

    def issue(storage: ObjectStorage, key: str) -> tuple[str, str]:
        url = storage.issue_write_grant(key, "image/jpeg", ttl_seconds=900)
        return url, storage.issue_public_read_ref(key)

Note:
    - Protocols are primarily for type checking
    - @runtime_checkable allows isinstance() checks
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ObjectStorage(Protocol):
    """
    Protocol for object storage backends.

    Clients upload bytes straight to the store with a write grant; the
    application only ever handles keys and references.

    Example:
        class InMemoryStorage:
            def issue_write_grant(self, key, content_type, ttl_seconds): ...
            def issue_public_read_ref(self, key): ...
            def delete_object(self, ref): ...
    """

    def issue_write_grant(self, key: str, content_type: str, ttl_seconds: int) -> str:
        """
        Issue a short-lived credential for uploading one object.

        Args:
            key: Storage key the upload is bound to
            content_type: MIME type the upload must declare
            ttl_seconds: Seconds until the grant expires

        Returns:
            URL the client PUTs the bytes to
        """
        ...

    def issue_public_read_ref(self, key: str) -> str:
        """
        Compute the durable public reference for a key.

        Args:
            key: Storage key

        Returns:
            Public reference (usually a CDN URL)
        """
        ...

    def delete_object(self, ref: str) -> None:
        """
        Delete the object behind a public reference.

        Best-effort: implementations raise on failure and callers decide
        whether to log or propagate.

        Args:
            ref: Public reference previously returned by issue_public_read_ref
        """
        ...
