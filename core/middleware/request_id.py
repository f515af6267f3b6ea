"""Request ID middleware for distributed tracing."""

import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.constants import REQUEST_ID_HEADER
from core.logging.context import clear_request_id, set_request_id


class RequestIDMiddleware:
    """Propagate or mint an X-Request-ID for every request.

    The ID is bound to the thread for log processors, attached to the
    request as ``request.request_id`` and echoed on the response. Dispatch
    attempts created during the request are logged with the same ID.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Bind the request ID around the downstream call.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with the request ID header added.
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        set_request_id(request_id)
        request.request_id = request_id  # type: ignore[attr-defined]

        try:
            response = self.get_response(request)
            response[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_request_id()
