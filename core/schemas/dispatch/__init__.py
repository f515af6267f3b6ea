"""Notification dispatch schemas."""

from core.schemas.dispatch.dispatch_attempt_response import (
    ChannelResultResponse,
    DispatchAttemptResponse,
)
from core.schemas.dispatch.notification_send_request import NotificationSendRequest

__all__ = [
    "ChannelResultResponse",
    "DispatchAttemptResponse",
    "NotificationSendRequest",
]
