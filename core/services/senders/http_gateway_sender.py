"""Base sender for channels delivered through an HTTP gateway."""

from typing import Any

import requests
import structlog

from core.enums.notification import Topic
from core.services.senders.base import ChannelSender, SendResult

logger = structlog.get_logger(__name__)


class HttpGatewaySender(ChannelSender):
    """POST a JSON payload to a provider gateway and interpret the reply.

    Subclasses set ``channel`` and build the payload. A 2xx reply is a
    successful delivery; any other status, a timeout or a connection error
    is a failed delivery.
    """

    gateway_name = "gateway"

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 10.0):
        """Initialize gateway sender.

        Args:
            base_url: Gateway endpoint URL; empty means not configured
            api_key: Bearer token sent to the gateway
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.api_key = api_key
        self.timeout = timeout

    def build_payload(
        self, address: str, topic: Topic, metadata: dict[str, Any]
    ) -> dict[str, Any]:
        """Return the JSON body for one delivery."""
        return {
            "to": address,
            "topic": Topic(topic).value,
            "metadata": metadata,
        }

    def _get_headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def send(self, address: str, topic: Topic, metadata: dict[str, Any]) -> SendResult:
        """Deliver through the gateway."""
        if not self.base_url:
            return SendResult.failed(f"{self.gateway_name} is not configured")

        try:
            response = requests.post(
                self.base_url,
                json=self.build_payload(address, topic, metadata),
                headers=self._get_headers(),
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.warning(
                "gateway_request_timed_out",
                gateway=self.gateway_name,
                channel=self.channel.value,
            )
            return SendResult.failed(f"{self.gateway_name} request timed out")
        except requests.RequestException as e:
            logger.error(
                "gateway_request_failed",
                gateway=self.gateway_name,
                channel=self.channel.value,
                error=str(e),
            )
            return SendResult.failed(f"{self.gateway_name} unreachable: {e}")

        logger.info(
            "gateway_response_received",
            gateway=self.gateway_name,
            channel=self.channel.value,
            status_code=response.status_code,
        )

        if not response.ok:
            return SendResult.failed(
                f"{self.gateway_name} returned {response.status_code}: "
                f"{response.text[:200]}"
            )

        return SendResult.sent(provider_message_id=_message_id(response))


def _message_id(response: requests.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message_id = body.get("message_id") or body.get("id")
        return str(message_id) if message_id is not None else None
    return None
