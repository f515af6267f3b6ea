"""Email channel sender using SMTP."""

import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import make_msgid
from typing import Any

from django.conf import settings

import structlog

from core.enums.notification import Channel, Topic
from core.services.senders.base import ChannelSender, SendResult

logger = structlog.get_logger(__name__)


class EmailChannelSender(ChannelSender):
    """Send notifications as plain-text email over SMTP.

    The subject and body come from the ``subject`` and ``body`` metadata
    keys, falling back to a generic message for the topic.
    """

    channel = Channel.EMAIL

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool | None = None,
        from_email: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        """Initialize with explicit SMTP settings or the Django EMAIL_* settings."""
        self.smtp_host = host if host is not None else settings.EMAIL_HOST
        self.smtp_port = port if port is not None else settings.EMAIL_PORT
        self.smtp_user = username if username is not None else settings.EMAIL_HOST_USER
        self.smtp_password = (
            password if password is not None else settings.EMAIL_HOST_PASSWORD
        )
        self.use_tls = use_tls if use_tls is not None else settings.EMAIL_USE_TLS
        self.from_email = from_email or settings.DEFAULT_FROM_EMAIL
        self.timeout = timeout

    def send(self, address: str, topic: Topic, metadata: dict[str, Any]) -> SendResult:
        """Send one email; SMTP and socket errors become failed results."""
        topic_value = Topic(topic).value
        subject = str(metadata.get("subject") or f"New {topic_value} notification")
        body = str(
            metadata.get("body")
            or f"You have a new {topic_value} notification."
        )

        message_id = make_msgid(domain=self.from_email.rpartition("@")[2] or None)
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = address
        msg["Message-ID"] = message_id
        msg.attach(MIMEText(body, "plain"))

        try:
            with smtplib.SMTP(
                self.smtp_host, self.smtp_port, timeout=self.timeout
            ) as server:
                if self.use_tls:
                    server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "email_send_failed",
                to_email=address,
                topic=topic_value,
                error=str(e),
            )
            return SendResult.failed(f"SMTP delivery failed: {e}")

        logger.info("email_sent", to_email=address, topic=topic_value)
        return SendResult.sent(provider_message_id=message_id)
