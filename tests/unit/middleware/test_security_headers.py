"""Unit tests for SecurityHeadersMiddleware."""

import unittest

from django.http import HttpRequest, HttpResponse

from core.constants import SECURITY_HEADERS
from core.middleware.security_headers import SecurityHeadersMiddleware


class TestSecurityHeadersMiddleware(unittest.TestCase):
    """Test cases for SecurityHeadersMiddleware."""

    def _create_request(self):
        """Helper to create a test request."""
        request = HttpRequest()
        request.method = "GET"
        request.path = "/test/"
        return request

    def test_adds_all_security_headers(self):
        """Test that all security headers are added to the response."""
        middleware = SecurityHeadersMiddleware(lambda request: HttpResponse("OK"))

        response = middleware(self._create_request())

        for header, value in SECURITY_HEADERS.items():
            self.assertEqual(response[header], value)

    def test_content_security_policy_denies_everything(self):
        """Test that the JSON API forbids all resource loading."""
        middleware = SecurityHeadersMiddleware(lambda request: HttpResponse("OK"))

        response = middleware(self._create_request())

        self.assertEqual(
            response["Content-Security-Policy"],
            "default-src 'none'; frame-ancestors 'none'",
        )

    def test_keeps_headers_set_by_view(self):
        """Test that a header the view already set is not overwritten."""

        def get_response(request):
            response = HttpResponse("OK")
            response["X-Frame-Options"] = "SAMEORIGIN"
            return response

        response = SecurityHeadersMiddleware(get_response)(self._create_request())

        self.assertEqual(response["X-Frame-Options"], "SAMEORIGIN")
        self.assertEqual(response["X-Content-Type-Options"], "nosniff")


if __name__ == "__main__":
    unittest.main()
