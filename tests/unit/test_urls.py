"""Unit tests for URL routing."""

import unittest

from django.urls import resolve, reverse

from core import views


class TestUrls(unittest.TestCase):
    """Every route resolves to its view under the API prefix."""

    def test_routes(self):
        """Test that each named route reverses and resolves."""
        cases = [
            ("health-live", {}, views.LivenessCheckView),
            ("health-ready", {}, views.ReadinessCheckView),
            ("preference-create", {}, views.PreferenceCreateView),
            ("preference-detail", {"user_id": "u-1"}, views.PreferenceDetailView),
            ("notification-send", {}, views.NotificationSendView),
            (
                "dispatch-attempt-detail",
                {"attempt_id": "abc"},
                views.DispatchAttemptDetailView,
            ),
            (
                "user-dispatch-attempts",
                {"user_id": "u-1"},
                views.UserDispatchAttemptListView,
            ),
        ]
        for name, kwargs, view_class in cases:
            with self.subTest(name=name):
                url = reverse(name, kwargs=kwargs)
                self.assertTrue(url.startswith("/api/v1/notification/"))
                self.assertIs(resolve(url).func.view_class, view_class)


if __name__ == "__main__":
    unittest.main()
