"""Append-only dispatch log.

Every send request that passes validation leaves one DispatchAttempt, with
one ChannelResult per channel attempted. Results are created PENDING and
settled to SENT or FAILED exactly once; nothing is ever updated afterwards
or deleted.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from django.db import transaction
from django.db.models import QuerySet
from django.utils import timezone

import structlog

from core.enums.notification import Channel, ChannelStatus, Topic
from core.exceptions.service_exceptions import (
    DispatchAttemptNotFoundError,
    InvalidStatusTransitionError,
)
from core.models import ChannelResult, DispatchAttempt, aggregate_outcome

logger = structlog.get_logger(__name__)

__all__ = ["DispatchLog", "aggregate_outcome", "dispatch_log"]


class DispatchLog:
    """Writes and reads dispatch history."""

    def open_attempt(
        self,
        user_id: str,
        topic: Topic,
        channels: Sequence[Channel],
        requested_channels: Sequence[Channel] | None = None,
        metadata: dict[str, Any] | None = None,
        user_timezone: str = "UTC",
    ) -> DispatchAttempt:
        """Record an accepted send request with a PENDING result per channel.

        Args:
            user_id: Target user.
            topic: Notification topic.
            channels: Channels that will be attempted; empty when suppressed.
            requested_channels: Channels the caller asked for, or None.
            metadata: Validated request metadata.
            user_timezone: The user's timezone at dispatch time.

        Returns:
            The persisted attempt.
        """
        with transaction.atomic():
            attempt = DispatchAttempt.objects.create(
                user_id=user_id,
                topic=Topic(topic).value,
                requested_channels=(
                    None
                    if requested_channels is None
                    else [Channel(channel).value for channel in requested_channels]
                ),
                metadata=metadata or {},
                user_timezone=user_timezone,
            )
            for channel in channels:
                ChannelResult.objects.create(
                    attempt=attempt,
                    channel=Channel(channel).value,
                    status=ChannelStatus.PENDING.value,
                )

        logger.info(
            "dispatch_attempt_opened",
            attempt_id=str(attempt.attempt_id),
            user_id=user_id,
            topic=attempt.topic,
            channels=[Channel(channel).value for channel in channels],
            timezone=user_timezone,
        )
        return attempt

    def record_sent(
        self,
        attempt: DispatchAttempt,
        channel: Channel,
        sent_at: datetime | None = None,
    ) -> None:
        """Settle a channel result as SENT.

        Raises:
            InvalidStatusTransitionError: If the result is not PENDING.
        """
        now = timezone.now()
        self._settle(
            attempt,
            channel,
            status=ChannelStatus.SENT.value,
            sent_at=sent_at or now,
            settled_at=now,
        )
        logger.info(
            "channel_sent",
            attempt_id=str(attempt.attempt_id),
            user_id=attempt.user_id,
            channel=Channel(channel).value,
        )

    def record_failed(
        self,
        attempt: DispatchAttempt,
        channel: Channel,
        reason: str,
    ) -> None:
        """Settle a channel result as FAILED with a human-readable reason.

        Raises:
            InvalidStatusTransitionError: If the result is not PENDING.
        """
        self._settle(
            attempt,
            channel,
            status=ChannelStatus.FAILED.value,
            failure_reason=reason,
            settled_at=timezone.now(),
        )
        logger.warning(
            "channel_failed",
            attempt_id=str(attempt.attempt_id),
            user_id=attempt.user_id,
            channel=Channel(channel).value,
            failure_reason=reason,
        )

    def _settle(self, attempt: DispatchAttempt, channel: Channel, **fields) -> None:
        channel_value = Channel(channel).value
        updated = ChannelResult.objects.filter(
            attempt=attempt,
            channel=channel_value,
            status=ChannelStatus.PENDING.value,
        ).update(**fields)

        if updated != 1:
            current = (
                ChannelResult.objects.filter(attempt=attempt, channel=channel_value)
                .values_list("status", flat=True)
                .first()
            )
            raise InvalidStatusTransitionError(
                attempt.attempt_id, channel_value, current
            )

    def get_attempt(self, attempt_id: UUID | str) -> DispatchAttempt:
        """Load an attempt with its results.

        Raises:
            DispatchAttemptNotFoundError: If no attempt has this ID.
        """
        try:
            return DispatchAttempt.objects.prefetch_related("results").get(
                attempt_id=attempt_id
            )
        except DispatchAttempt.DoesNotExist as e:
            raise DispatchAttemptNotFoundError(attempt_id) from e

    def list_attempts_for_user(self, user_id: str) -> QuerySet[DispatchAttempt]:
        """Return a user's attempts, newest first.

        History is kept after the user's preference record is deleted.
        """
        return (
            DispatchAttempt.objects.filter(user_id=user_id)
            .prefetch_related("results")
            .order_by("-created_at")
        )


dispatch_log = DispatchLog()
