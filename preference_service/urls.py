"""Root URL configuration for the notification preference service."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/notification/", include("core.urls")),
]
