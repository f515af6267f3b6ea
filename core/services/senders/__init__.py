"""Channel senders and the default sender set."""

from django.conf import settings

from core.enums.notification import Channel
from core.services.senders.base import ChannelSender, SendResult
from core.services.senders.email_sender import EmailChannelSender
from core.services.senders.http_gateway_sender import HttpGatewaySender
from core.services.senders.push_sender import PushChannelSender
from core.services.senders.sms_sender import SmsChannelSender


def build_channel_senders() -> dict[Channel, ChannelSender]:
    """Construct one sender per channel from Django settings."""
    timeout = settings.CHANNEL_SEND_TIMEOUT_SECONDS
    return {
        Channel.EMAIL: EmailChannelSender(timeout=timeout),
        Channel.SMS: SmsChannelSender(
            base_url=settings.SMS_GATEWAY_URL,
            api_key=settings.SMS_GATEWAY_API_KEY,
            timeout=timeout,
        ),
        Channel.PUSH: PushChannelSender(
            base_url=settings.PUSH_GATEWAY_URL,
            api_key=settings.PUSH_GATEWAY_API_KEY,
            timeout=timeout,
        ),
    }


__all__ = [
    "ChannelSender",
    "EmailChannelSender",
    "HttpGatewaySender",
    "PushChannelSender",
    "SendResult",
    "SmsChannelSender",
    "build_channel_senders",
]
