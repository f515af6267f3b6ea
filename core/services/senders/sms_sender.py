"""SMS channel sender."""

from typing import Any

from core.enums.notification import Channel, Topic
from core.services.senders.http_gateway_sender import HttpGatewaySender


class SmsChannelSender(HttpGatewaySender):
    """Send notifications as text messages through the SMS gateway."""

    channel = Channel.SMS
    gateway_name = "SMS gateway"

    def build_payload(
        self, address: str, topic: Topic, metadata: dict[str, Any]
    ) -> dict[str, Any]:
        """SMS gateways take a single text body."""
        topic_value = Topic(topic).value
        text = metadata.get("body") or f"You have a new {topic_value} notification."
        return {"to": address, "text": str(text), "topic": topic_value}
