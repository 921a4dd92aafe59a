"""
Celery tasks for media storage cleanup.

Storage objects of removed or deleted media are deleted asynchronously,
after the metadata change has committed. Deletion is best-effort: each
ref is attempted independently and failures are logged, never raised.
Orphans left behind are picked up by an external inventory sweep.

Usage:
    from media.tasks import delete_storage_objects

    delete_storage_objects.delay([media.original_url, media.thumbnail_url])
"""

from __future__ import annotations

import logging

from celery import shared_task
from media.storage import get_object_storage

logger = logging.getLogger(__name__)


# =============================================================================
# Storage Cleanup Task
# =============================================================================


@shared_task(acks_late=True, ignore_result=False)
def delete_storage_objects(refs: list[str]) -> dict:
    """
    Delete the storage objects of one media.

    Args:
        refs: Public refs of the media's stored variants.

    Returns:
        Dict with deleted and failed counts.
    """
    storage = get_object_storage()

    deleted = 0
    failed = 0
    for ref in refs:
        try:
            storage.delete_object(ref)
        except Exception as e:
            failed += 1
            logger.error(
                "Failed to delete storage object",
                extra={"ref": ref, "error": str(e)},
            )
        else:
            deleted += 1

    if failed:
        logger.warning(
            f"Storage cleanup finished with {failed} failure(s)",
            extra={"deleted": deleted, "failed": failed},
        )
    else:
        logger.info(
            "Storage cleanup finished",
            extra={"deleted": deleted},
        )

    return {"deleted": deleted, "failed": failed}
