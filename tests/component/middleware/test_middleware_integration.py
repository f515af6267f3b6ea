"""Component tests for middleware integration with Django/DRF."""

import uuid

from django.test import Client, TestCase, override_settings

from core.constants import PROCESS_TIME_HEADER, REQUEST_ID_HEADER, SECURITY_HEADERS


class TestMiddlewareIntegration(TestCase):
    """Test middleware integration with actual HTTP requests."""

    def setUp(self):
        """Set up test client."""
        self.client = Client()

    def test_request_id_middleware_integration(self):
        """Test that request ID middleware works with actual requests."""
        response = self.client.get("/api/v1/notification/health/live")

        try:
            uuid.UUID(response[REQUEST_ID_HEADER])
        except ValueError:
            self.fail("Request ID is not a valid UUID")

    def test_custom_request_id_preserved(self):
        """Test that custom request ID from client is preserved."""
        response = self.client.get(
            "/api/v1/notification/health/live",
            headers={"x-request-id": "custom-request-id-12345"},
        )

        self.assertEqual(response[REQUEST_ID_HEADER], "custom-request-id-12345")

    def test_error_body_carries_request_id(self):
        """Test that API errors echo the request ID in body and header."""
        response = self.client.get(
            "/api/v1/notification/preferences/nobody",
            headers={"x-request-id": "trace-1"},
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["request_id"], "trace-1")
        self.assertEqual(response[REQUEST_ID_HEADER], "trace-1")

    def test_all_middleware_headers_present(self):
        """Test that all expected middleware headers are present."""
        response = self.client.get("/api/v1/notification/health/live")

        self.assertIn(REQUEST_ID_HEADER, response)
        self.assertGreaterEqual(float(response[PROCESS_TIME_HEADER]), 0)
        for header, expected_value in SECURITY_HEADERS.items():
            self.assertEqual(response[header], expected_value)

    def test_unknown_route_still_gets_headers(self):
        """Test that Django 404s pass through the middleware."""
        response = self.client.get("/api/v1/notification/non-existent/")

        self.assertEqual(response.status_code, 404)
        self.assertIn(REQUEST_ID_HEADER, response)

    @override_settings(DEBUG=False)
    def test_middleware_in_production_mode(self):
        """Test that middleware works correctly in production mode."""
        response = self.client.get("/api/v1/notification/health/live")

        self.assertIn(REQUEST_ID_HEADER, response)
        self.assertIn(PROCESS_TIME_HEADER, response)
        self.assertIn("X-Frame-Options", response)
