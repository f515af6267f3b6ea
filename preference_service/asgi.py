"""ASGI config for the notification preference service."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "preference_service.settings")

application = get_asgi_application()
