"""Models for the core app."""

from core.models.dispatch_attempt import (
    ChannelResult,
    DispatchAttempt,
    aggregate_outcome,
)
from core.models.preference_record import PreferenceRecord

__all__ = [
    "ChannelResult",
    "DispatchAttempt",
    "PreferenceRecord",
    "aggregate_outcome",
]
