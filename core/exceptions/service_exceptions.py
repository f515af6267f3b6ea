"""Custom exceptions for preference management and notification dispatch."""

from collections.abc import Iterable


class NotificationServiceError(Exception):
    """Base exception for errors raised by the service layer."""

    status_code = 500
    error_code = "internal_error"

    def __init__(self, message: str, detail: str | None = None):
        """Initialize service error.

        Args:
            message: Error message
            detail: Additional details for the client
        """
        self.detail = detail
        super().__init__(message)


class RequestValidationError(NotificationServiceError):
    """Request input is malformed or outside the known enumerations (400)."""

    status_code = 400
    error_code = "bad_request"


class InvalidTopicError(RequestValidationError):
    """Topic is not one of the known notification topics."""

    error_code = "invalid_topic"

    def __init__(self, topic: object):
        """Initialize invalid topic error.

        Args:
            topic: The rejected topic value
        """
        self.topic = topic
        super().__init__(message=f"Unknown notification topic: {topic!r}")


class InvalidChannelError(RequestValidationError):
    """One or more requested channels are not known delivery channels."""

    error_code = "invalid_channel"

    def __init__(self, channels: Iterable[object]):
        """Initialize invalid channel error.

        Args:
            channels: The rejected channel values
        """
        self.channels = list(channels)
        rendered = ", ".join(repr(channel) for channel in self.channels)
        super().__init__(message=f"Unknown notification channel(s): {rendered}")


class NotFoundError(NotificationServiceError):
    """Requested resource does not exist (404)."""

    status_code = 404
    error_code = "not_found"


class UserNotFoundError(NotFoundError):
    """No preference record exists for the user."""

    def __init__(self, user_id: str):
        """Initialize user not found error.

        Args:
            user_id: ID of the user that was not found
        """
        self.user_id = user_id
        super().__init__(message=f"User with ID {user_id} not found")


class DispatchAttemptNotFoundError(NotFoundError):
    """No dispatch attempt exists with the given ID."""

    def __init__(self, attempt_id: object):
        """Initialize dispatch attempt not found error.

        Args:
            attempt_id: ID of the attempt that was not found
        """
        self.attempt_id = attempt_id
        super().__init__(message=f"Dispatch attempt with ID {attempt_id} not found")


class ConflictError(NotificationServiceError):
    """Conflict error for operations that cannot be performed (409)."""

    status_code = 409
    error_code = "conflict"


class ImmutableDispatchLogError(NotificationServiceError):
    """Dispatch history is append-only and cannot be deleted or rewritten."""

    error_code = "immutable_dispatch_log"


class InvalidStatusTransitionError(NotificationServiceError):
    """A channel result was asked to leave a terminal status."""

    error_code = "invalid_status_transition"

    def __init__(self, attempt_id: object, channel: str, current_status: str | None):
        """Initialize invalid transition error.

        Args:
            attempt_id: ID of the dispatch attempt
            channel: Channel whose result was being settled
            current_status: Status found on the result, or None if absent
        """
        self.attempt_id = attempt_id
        self.channel = channel
        self.current_status = current_status
        super().__init__(
            message=(
                f"Cannot settle {channel} result of attempt {attempt_id}: "
                f"status is {current_status or 'missing'}, expected pending"
            )
        )
