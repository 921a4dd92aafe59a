"""
Base service layer patterns for business logic encapsulation.

Service Layer Philosophy:
    Services encapsulate business logic separate from views and models.
    Views handle HTTP concerns, models handle data, services handle logic.

Error Handling:
    Services raise core.exceptions subclasses for expected failures
    (validation, ownership, limits). The DRF exception handler renders
    them, so views stay free of try/except blocks.

Collaborators:
    Services are plain objects constructed with their collaborators
    (object storage, other services) instead of reaching for globals.
    The media AppConfig builds the collaborators once at startup.

Usage:
    from core.services import BaseService

    class RecordService(BaseService):
        def __init__(self, storage: ObjectStorage) -> None:
            self.storage = storage

        def delete(self, user, record_id):
            with self.atomic():
                record = Record.objects.select_for_update().get(id=record_id)
                record.delete()

            self.get_logger().info("Deleted record %s", record_id)

Related:
    - core.exceptions: Error taxonomy raised by services
    - core.protocols: Collaborator interfaces services depend on
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Services hold no per-request state; collaborators only
        - Raise core.exceptions for expected failures
        - Let unexpected failures propagate
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.

        Returns:
            Logger instance for this service
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation fails, all
        changes are rolled back. Nested use creates a savepoint.

        Yields:
            None

        Example:
            with cls.atomic():
                record = Record.objects.create(user=user, description=text)
                MediaObject.objects.filter(id=media_id).update(record=record)
        """
        with transaction.atomic():
            yield
