"""Notification-related enumerations.

This module contains enums for notification topics, delivery channels,
delivery frequency, per-channel delivery status, and the aggregated
dispatch outcome used throughout the service.
"""

from enum import Enum


class Topic(str, Enum):
    """Categories of notification a user can opt in to or out of."""

    MARKETING = "marketing"
    NEWSLETTER = "newsletter"
    UPDATES = "updates"


class Channel(str, Enum):
    """Notification delivery channels.

    Declaration order is the default dispatch order when the caller does
    not request specific channels.
    """

    EMAIL = "email"
    SMS = "sms"
    PUSH = "push"


class Frequency(str, Enum):
    """How often a user is willing to receive notifications.

    NEVER overrides every per-topic opt-in.
    """

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    NEVER = "never"


class ChannelStatus(str, Enum):
    """Delivery status of a single channel within a dispatch attempt.

    PENDING transitions to SENT or FAILED exactly once.
    """

    PENDING = "pending"
    SENT = "sent"
    FAILED = "failed"


class DispatchOutcome(str, Enum):
    """Aggregated outcome of a dispatch attempt, derived from its channels."""

    ALL_SENT = "ALL_SENT"
    PARTIAL_FAILURE = "PARTIAL_FAILURE"
    ALL_FAILED = "ALL_FAILED"
    SUPPRESSED = "SUPPRESSED"
    PENDING = "PENDING"
