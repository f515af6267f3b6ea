"""Exception handling utilities for the notification preference service."""

from core.exceptions.handlers import custom_exception_handler
from core.exceptions.service_exceptions import (
    ConflictError,
    DispatchAttemptNotFoundError,
    ImmutableDispatchLogError,
    InvalidChannelError,
    InvalidStatusTransitionError,
    InvalidTopicError,
    NotFoundError,
    NotificationServiceError,
    RequestValidationError,
    UserNotFoundError,
)

__all__ = [
    "ConflictError",
    "DispatchAttemptNotFoundError",
    "ImmutableDispatchLogError",
    "InvalidChannelError",
    "InvalidStatusTransitionError",
    "InvalidTopicError",
    "NotFoundError",
    "NotificationServiceError",
    "RequestValidationError",
    "UserNotFoundError",
    "custom_exception_handler",
]
