"""
DRF exception handler for application errors.

Renders BaseApplicationError subclasses with their stable error code and
HTTP status. Everything else falls through to DRF's default handler.

Configured in settings:
    REST_FRAMEWORK = {
        "EXCEPTION_HANDLER": "core.exception_handler.api_exception_handler",
    }
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


def api_exception_handler(exc: Exception, context: dict[str, Any]) -> Response | None:
    """
    Convert application errors into JSON responses.

    Args:
        exc: The raised exception
        context: DRF handler context (view, request, args, kwargs)

    Returns:
        Response for handled exceptions, None to let Django re-raise.
    """
    if isinstance(exc, BaseApplicationError):
        view = context.get("view")
        log_level = logging.ERROR if exc.http_status >= 500 else logging.INFO
        logger.log(
            log_level,
            "Request failed with %s",
            exc.error_code,
            extra={
                "error_code": exc.error_code,
                "view": view.__class__.__name__ if view else None,
            },
        )
        return Response(exc.to_dict(), status=exc.http_status)

    return exception_handler(exc, context)
