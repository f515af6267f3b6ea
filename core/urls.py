"""URL routing configuration for core application."""

from django.urls import path

from .views import (
    DispatchAttemptDetailView,
    LivenessCheckView,
    NotificationSendView,
    PreferenceCreateView,
    PreferenceDetailView,
    ReadinessCheckView,
    UserDispatchAttemptListView,
)

urlpatterns = [
    # Health check endpoints
    path("health/live", LivenessCheckView.as_view(), name="health-live"),
    path("health/ready", ReadinessCheckView.as_view(), name="health-ready"),
    # Preference endpoints
    path("preferences", PreferenceCreateView.as_view(), name="preference-create"),
    path(
        "preferences/<str:user_id>",
        PreferenceDetailView.as_view(),
        name="preference-detail",
    ),
    # Dispatch endpoints
    path(
        "notifications/send",
        NotificationSendView.as_view(),
        name="notification-send",
    ),
    path(
        "dispatch-attempts/<str:attempt_id>",
        DispatchAttemptDetailView.as_view(),
        name="dispatch-attempt-detail",
    ),
    path(
        "users/<str:user_id>/dispatch-attempts",
        UserDispatchAttemptListView.as_view(),
        name="user-dispatch-attempts",
    ),
]
