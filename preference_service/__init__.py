"""Django project package for the notification preference service."""
