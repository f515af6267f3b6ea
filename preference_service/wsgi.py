"""WSGI config for the notification preference service."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "preference_service.settings")

application = get_wsgi_application()
