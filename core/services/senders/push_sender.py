"""Push channel sender."""

from typing import Any

from core.enums.notification import Channel, Topic
from core.services.senders.http_gateway_sender import HttpGatewaySender


class PushChannelSender(HttpGatewaySender):
    """Send notifications to a device token through the push gateway."""

    channel = Channel.PUSH
    gateway_name = "Push gateway"

    def build_payload(
        self, address: str, topic: Topic, metadata: dict[str, Any]
    ) -> dict[str, Any]:
        """Push payloads carry a title, a body and the remaining metadata as data."""
        topic_value = Topic(topic).value
        data = {
            key: value
            for key, value in metadata.items()
            if key not in ("subject", "body")
        }
        return {
            "device_token": address,
            "title": str(metadata.get("subject") or topic_value.capitalize()),
            "body": str(metadata.get("body") or ""),
            "data": {"topic": topic_value, **data},
        }
