"""Logging utilities for the notification preference service."""

from core.logging.config import setup_logging
from core.logging.context import clear_request_id, get_request_id, set_request_id

__all__ = [
    "clear_request_id",
    "get_request_id",
    "set_request_id",
    "setup_logging",
]
