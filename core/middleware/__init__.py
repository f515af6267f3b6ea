"""Middleware components for the notification preference service."""

from core.middleware.process_time import ProcessTimeMiddleware
from core.middleware.request_id import RequestIDMiddleware
from core.middleware.security_headers import SecurityHeadersMiddleware

__all__ = [
    "ProcessTimeMiddleware",
    "RequestIDMiddleware",
    "SecurityHeadersMiddleware",
]
