"""Global exception handlers for the notification preference service."""

import logging
import traceback
from datetime import UTC, datetime
from typing import Any

from django.conf import settings
from django.http import Http404

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions.service_exceptions import NotificationServiceError
from core.logging.context import get_request_id

logger = logging.getLogger(__name__)


def custom_exception_handler(
    exc: Exception, context: dict[str, Any]
) -> Response | None:
    """Custom exception handler for Django REST Framework.

    Handles DRF, Django and service-layer exceptions, providing:
    - Standard response format for clients:
      {error, message, detail, request_id, timestamp}
    - Detailed logging for troubleshooting: error type, path, stack trace

    Args:
        exc: The exception that was raised.
        context: Context dictionary containing request and view information.

    Returns:
        A Response object with the error details.
    """
    view = context.get("view")
    request = view.request if view else None
    request_id = get_request_id()

    # Let DRF handle its own exceptions first
    response = exception_handler(exc, context)

    if response is None:
        if isinstance(exc, NotificationServiceError):
            response_data = _create_error_response(
                error=exc.error_code,
                message=str(exc),
                request_id=request_id,
                detail=exc.detail,
            )
            response = Response(response_data, status=exc.status_code)
        elif isinstance(exc, Http404):
            response_data = _create_error_response(
                error="not_found",
                message="The requested resource was not found.",
                request_id=request_id,
            )
            response = Response(response_data, status=status.HTTP_404_NOT_FOUND)
        else:
            # Unhandled exception - log as error and return 500
            response_data = _create_error_response(
                error="internal_error",
                message="An internal server error occurred.",
                request_id=request_id,
            )
            response = Response(
                response_data, status=status.HTTP_500_INTERNAL_SERVER_ERROR
            )

    if request_id and response:
        response["X-Request-ID"] = request_id

    _log_exception(exc, request, response)

    return response


def _create_error_response(
    error: str,
    message: str,
    request_id: str | None,
    detail: str | None = None,
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        error: Machine-readable error code.
        message: The error message to return to the client.
        request_id: The request ID for tracing.
        detail: Optional additional detail.

    Returns:
        Dictionary with standard error response format.
    """
    return {
        "error": error,
        "message": message,
        "detail": detail,
        "request_id": request_id,
        "timestamp": datetime.now(UTC).isoformat(),
    }


def _log_exception(
    exc: Exception,
    request: Any,
    response: Response | None,
) -> None:
    """Log exception information, with a stack trace in DEBUG mode.

    Args:
        exc: The exception that was raised.
        request: The HTTP request object.
        response: The response object (if available).
    """
    status_code = response.status_code if response else 500

    if isinstance(exc, (Http404, APIException, NotificationServiceError)) and (
        400 <= status_code < 500
    ):
        log_level = logging.WARNING
    else:
        log_level = logging.ERROR

    request_path = request.path if request else "unknown"
    request_method = request.method if request else "unknown"

    log_message = (
        f"Exception occurred: {type(exc).__name__}: {exc} | "
        f"Path: {request_method} {request_path} | "
        f"Status: {status_code}"
    )

    if settings.DEBUG:
        stack_trace = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        log_message += f"\nStack trace:\n{stack_trace}"

    logger.log(log_level, log_message)
