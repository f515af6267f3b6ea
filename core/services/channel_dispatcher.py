"""Channel dispatcher: fans one notification out across eligible channels.

A dispatch validates the request, filters channels through the user's
preferences, logs a DispatchAttempt, calls each channel sender on a worker
thread and settles every channel result before returning. Sender threads
never touch the database; every write happens on the calling thread.
"""

from collections.abc import Iterable, Mapping
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime
from functools import lru_cache
from typing import Any

from django.conf import settings
from django.utils import timezone

import structlog

from core.constants import TIMEOUT_FAILURE_REASON
from core.enums.notification import Channel, Topic
from core.exceptions.service_exceptions import (
    InvalidChannelError,
    InvalidTopicError,
    UserNotFoundError,
)
from core.logging.context import clear_request_id, get_request_id, set_request_id
from core.models import DispatchAttempt, PreferenceRecord
from core.repositories import PreferenceRepository
from core.services.dispatch_log import DispatchLog, dispatch_log
from core.services.eligibility import eligible_channels
from core.services.senders import ChannelSender, SendResult, build_channel_senders

logger = structlog.get_logger(__name__)


class ChannelDispatcher:
    """Dispatch notifications to users through their eligible channels."""

    def __init__(
        self,
        senders: Mapping[Channel, ChannelSender],
        preference_repository: type[PreferenceRepository] = PreferenceRepository,
        log: DispatchLog = dispatch_log,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize dispatcher.

        Args:
            senders: Sender to use for each channel
            preference_repository: Source of preference records
            log: Dispatch log receiving attempts and results
            timeout_seconds: How long to wait for all senders before failing
                the stragglers with a timeout (default:
                CHANNEL_SEND_TIMEOUT_SECONDS)
        """
        self.senders = {Channel(channel): sender for channel, sender in senders.items()}
        self.preference_repository = preference_repository
        self.dispatch_log = log
        self.timeout_seconds = (
            timeout_seconds
            if timeout_seconds is not None
            else settings.CHANNEL_SEND_TIMEOUT_SECONDS
        )

    def dispatch(
        self,
        user_id: str,
        topic: Topic | str,
        requested_channels: Iterable[Channel | str] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> DispatchAttempt:
        """Send one notification and return the settled attempt.

        Args:
            user_id: Target user
            topic: Notification topic
            requested_channels: Channels to restrict delivery to, in order,
                or None for every enabled channel
            metadata: Scalar key/value payload passed to each sender

        Returns:
            The DispatchAttempt with every channel result settled. An attempt
            with no results is a suppressed notification.

        Raises:
            InvalidTopicError: If topic is not a known topic
            InvalidChannelError: If any requested channel is unknown
            UserNotFoundError: If the user has no preference record
        """
        topic = _parse_topic(topic)
        requested = _parse_channels(requested_channels)

        record = self.preference_repository.get(user_id)
        if record is None:
            logger.warning(
                "dispatch_rejected_unknown_user",
                user_id=user_id,
                topic=topic.value,
            )
            raise UserNotFoundError(user_id)

        metadata = dict(metadata or {})
        channels = eligible_channels(record, topic, requested)

        attempt = self.dispatch_log.open_attempt(
            user_id=user_id,
            topic=topic,
            channels=channels,
            requested_channels=requested,
            metadata=metadata,
            user_timezone=record.timezone,
        )

        if not channels:
            logger.info(
                "dispatch_suppressed",
                attempt_id=str(attempt.attempt_id),
                user_id=user_id,
                topic=topic.value,
                frequency=record.frequency,
                timezone=record.timezone,
            )
            return self.dispatch_log.get_attempt(attempt.attempt_id)

        outcomes = self._send_all(record, topic, channels, metadata)

        for channel in channels:
            result, finished_at = outcomes[channel]
            if result.success:
                self.dispatch_log.record_sent(attempt, channel, sent_at=finished_at)
            else:
                self.dispatch_log.record_failed(
                    attempt, channel, result.failure_reason or "Unknown failure"
                )

        attempt = self.dispatch_log.get_attempt(attempt.attempt_id)
        logger.info(
            "dispatch_completed",
            attempt_id=str(attempt.attempt_id),
            user_id=user_id,
            topic=topic.value,
            channels=[channel.value for channel in channels],
            overall_status=attempt.overall_status.value,
            timezone=record.timezone,
        )
        return attempt

    def _send_all(
        self,
        record: PreferenceRecord,
        topic: Topic,
        channels: list[Channel],
        metadata: dict[str, Any],
    ) -> dict[Channel, tuple[SendResult, datetime | None]]:
        """Run every sender concurrently and collect one outcome per channel.

        Channels without a sender or an address fail without a call. Calls
        that have not returned within timeout_seconds fail with a timeout;
        the executor is abandoned rather than joined so a hung sender cannot
        hold the request.
        """
        outcomes: dict[Channel, tuple[SendResult, datetime | None]] = {}
        calls: list[tuple[Channel, ChannelSender, str]] = []

        for channel in channels:
            sender = self.senders.get(channel)
            address = record.address_for(channel)
            if sender is None:
                outcomes[channel] = (
                    SendResult.failed(f"No sender configured for {channel.value}"),
                    None,
                )
            elif address is None:
                outcomes[channel] = (
                    SendResult.failed(
                        f"No {channel.value} address on preference record"
                    ),
                    None,
                )
            else:
                calls.append((channel, sender, address))

        if not calls:
            return outcomes

        request_id = get_request_id()
        executor = ThreadPoolExecutor(
            max_workers=len(calls), thread_name_prefix="channel-send"
        )
        futures: dict[Future, Channel] = {}
        try:
            for channel, sender, address in calls:
                future = executor.submit(
                    _call_sender, sender, address, topic, metadata, request_id
                )
                futures[future] = channel
            done, not_done = wait(futures, timeout=self.timeout_seconds)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        for future in done:
            channel = futures[future]
            try:
                outcomes[channel] = future.result()
            except Exception as e:
                logger.error(
                    "channel_sender_raised",
                    user_id=record.user_id,
                    channel=channel.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                outcomes[channel] = (SendResult.failed(str(e) or type(e).__name__), None)

        for future in not_done:
            channel = futures[future]
            logger.warning(
                "channel_send_timed_out",
                user_id=record.user_id,
                channel=channel.value,
                timeout_seconds=self.timeout_seconds,
            )
            outcomes[channel] = (SendResult.failed(TIMEOUT_FAILURE_REASON), None)

        return outcomes


def _call_sender(
    sender: ChannelSender,
    address: str,
    topic: Topic,
    metadata: dict[str, Any],
    request_id: str | None,
) -> tuple[SendResult, datetime]:
    """Worker-thread body: call one sender under the caller's request ID."""
    if request_id:
        set_request_id(request_id)
    try:
        result = sender.send(address, topic, metadata)
        return result, timezone.now()
    finally:
        clear_request_id()


def _parse_topic(topic: Topic | str) -> Topic:
    try:
        return Topic(topic)
    except ValueError as e:
        raise InvalidTopicError(topic) from e


def _parse_channels(
    channels: Iterable[Channel | str] | None,
) -> list[Channel] | None:
    if channels is None:
        return None

    parsed = []
    invalid = []
    for channel in channels:
        try:
            parsed.append(Channel(channel))
        except ValueError:
            invalid.append(channel)
    if invalid:
        raise InvalidChannelError(invalid)

    return list(dict.fromkeys(parsed))


@lru_cache(maxsize=1)
def get_channel_dispatcher() -> ChannelDispatcher:
    """Return the process-wide dispatcher wired to the configured senders."""
    return ChannelDispatcher(senders=build_channel_senders())
