"""Security headers middleware."""

from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from core.constants import SECURITY_HEADERS


class SecurityHeadersMiddleware:
    """Add the SECURITY_HEADERS set to every response.

    The API only serves JSON, so the content security policy denies all
    resource loading and framing. Headers already set by a view are kept.
    """

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]) -> None:
        """Initialize the middleware.

        Args:
            get_response: The next middleware or view in the chain.
        """
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """Add security headers to the response.

        Args:
            request: The incoming HTTP request.

        Returns:
            The HTTP response with security headers added.
        """
        response = self.get_response(request)

        for header, value in SECURITY_HEADERS.items():
            if header not in response:
                response[header] = value

        return response
