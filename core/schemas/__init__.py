"""Schemas for the core app."""

from core.schemas.dispatch import (
    ChannelResultResponse,
    DispatchAttemptResponse,
    NotificationSendRequest,
)
from core.schemas.health import (
    DependencyHealth,
    LivenessResponse,
    ReadinessResponse,
)
from core.schemas.preference import (
    PreferenceCreateRequest,
    PreferenceResponse,
    PreferenceUpdateRequest,
)

__all__ = [
    "ChannelResultResponse",
    "DependencyHealth",
    "DispatchAttemptResponse",
    "LivenessResponse",
    "NotificationSendRequest",
    "PreferenceCreateRequest",
    "PreferenceResponse",
    "PreferenceUpdateRequest",
    "ReadinessResponse",
]
