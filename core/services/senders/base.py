"""Channel sender interface.

A channel sender delivers one notification over one transport. Senders
report delivery problems through SendResult rather than raising; the
dispatcher still treats an exception from a sender as a failed delivery.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from core.enums.notification import Channel, Topic


@dataclass(frozen=True)
class SendResult:
    """Outcome of one sender call."""

    success: bool
    failure_reason: str | None = None
    provider_message_id: str | None = None

    @classmethod
    def sent(cls, provider_message_id: str | None = None) -> "SendResult":
        """Build a successful result."""
        return cls(success=True, provider_message_id=provider_message_id)

    @classmethod
    def failed(cls, reason: str) -> "SendResult":
        """Build a failed result with a human-readable reason."""
        return cls(success=False, failure_reason=reason)


class ChannelSender(ABC):
    """Delivers notifications over a single channel."""

    channel: Channel

    @abstractmethod
    def send(self, address: str, topic: Topic, metadata: dict[str, Any]) -> SendResult:
        """Deliver a notification.

        Args:
            address: Channel-specific destination (email address, phone
                number or device token).
            topic: Notification topic.
            metadata: Validated scalar key/value payload.

        Returns:
            SendResult describing success or the reason for failure.
        """
