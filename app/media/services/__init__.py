"""
Media services for the upload and entity-binding lifecycle.

    CredentialIssuer     Write grants + PENDING rows for an upload batch
    OwnershipVerifier    Caller owns a set of PENDING, unbound media
    EntityBinder         Create an entity and bind its ordered media
    SnapshotReconciler   Converge an entity's media to a target list
    CascadeCleanup       Delete an entity and schedule storage cleanup
"""

from media.services.binding import BindSpec, EntityBinder
from media.services.cleanup import CascadeCleanup, schedule_storage_deletion
from media.services.credentials import (
    CredentialIssuer,
    UploadCredential,
    UploadDescriptor,
)
from media.services.ownership import OwnershipVerifier
from media.services.reconciliation import (
    ReconcileResult,
    SnapshotReconciler,
    TargetItem,
)

__all__ = [
    "BindSpec",
    "CascadeCleanup",
    "CredentialIssuer",
    "EntityBinder",
    "OwnershipVerifier",
    "ReconcileResult",
    "SnapshotReconciler",
    "TargetItem",
    "UploadCredential",
    "UploadDescriptor",
    "schedule_storage_deletion",
]
