"""Enumerations for the core app."""

from core.enums.health_status import HealthStatus
from core.enums.notification import (
    Channel,
    ChannelStatus,
    DispatchOutcome,
    Frequency,
    Topic,
)

__all__ = [
    "Channel",
    "ChannelStatus",
    "DispatchOutcome",
    "Frequency",
    "HealthStatus",
    "Topic",
]
