"""Dispatch log models: one DispatchAttempt per send request and one
ChannelResult per channel attempted within it.

Both tables are append-only history. Attempts reference users by plain ID
rather than a foreign key so that deleting a preference record leaves past
attempts untouched.
"""

import uuid
from collections.abc import Iterable
from typing import ClassVar

from django.db import models

from core.enums.notification import ChannelStatus, DispatchOutcome
from core.exceptions.service_exceptions import ImmutableDispatchLogError


def aggregate_outcome(statuses: Iterable[str]) -> DispatchOutcome:
    """Reduce per-channel statuses to the attempt's overall outcome.

    Args:
        statuses: ChannelStatus values, one per attempted channel.

    Returns:
        SUPPRESSED for no channels, PENDING while any channel is unsettled,
        otherwise ALL_SENT, ALL_FAILED or PARTIAL_FAILURE.
    """
    statuses = [ChannelStatus(status) for status in statuses]

    if not statuses:
        return DispatchOutcome.SUPPRESSED
    if ChannelStatus.PENDING in statuses:
        return DispatchOutcome.PENDING

    sent = statuses.count(ChannelStatus.SENT)
    if sent == len(statuses):
        return DispatchOutcome.ALL_SENT
    if sent == 0:
        return DispatchOutcome.ALL_FAILED
    return DispatchOutcome.PARTIAL_FAILURE


class AppendOnlyQuerySet(models.QuerySet):
    """QuerySet that refuses bulk deletion."""

    def delete(self):
        """Reject deletion of dispatch history."""
        raise ImmutableDispatchLogError(
            f"{self.model.__name__} records are append-only and cannot be deleted"
        )


class DispatchAttempt(models.Model):
    """One logical notification send spanning zero or more channels.

    Attributes:
        attempt_id: Unique identifier generated at creation.
        user_id: Target user (plain ID, not a foreign key).
        topic: Notification topic.
        requested_channels: Channels the caller asked for, in order, or None
            when all enabled channels were requested.
        metadata: Validated scalar key/value payload from the request.
        user_timezone: Snapshot of the user's timezone at dispatch time.
        created_at: When the attempt was accepted.
    """

    attempt_id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
        help_text="Unique identifier for the dispatch attempt",
    )
    user_id = models.CharField(
        max_length=255,
        db_index=True,
        help_text="User the notification was addressed to",
    )
    topic = models.CharField(
        max_length=20,
        help_text="Notification topic",
    )
    requested_channels = models.JSONField(
        null=True,
        blank=True,
        help_text="Ordered channels requested by the caller, null for all enabled",
    )
    metadata = models.JSONField(
        default=dict,
        blank=True,
        help_text="Scalar key/value metadata supplied with the request",
    )
    user_timezone = models.CharField(
        max_length=64,
        default="UTC",
        help_text="User's timezone when the attempt was made",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the attempt was accepted",
    )

    objects = AppendOnlyQuerySet.as_manager()

    class Meta:
        """Django model metadata."""

        db_table = "dispatch_attempts"
        ordering: ClassVar[list[str]] = ["-created_at"]
        indexes: ClassVar[list] = [
            models.Index(
                fields=["user_id", "-created_at"], name="dispatch_user_created_idx"
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of the dispatch attempt."""
        return f"{self.topic} attempt {self.attempt_id} for user {self.user_id}"

    def __repr__(self) -> str:
        """Return detailed representation of the dispatch attempt."""
        return (
            f"<DispatchAttempt(id={self.attempt_id}, "
            f"user={self.user_id!r}, "
            f"topic={self.topic})>"
        )

    def save(self, *args, **kwargs) -> None:
        """Insert the attempt; existing attempts cannot be rewritten."""
        if not self._state.adding:
            raise ImmutableDispatchLogError(
                f"Dispatch attempt {self.attempt_id} is immutable"
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Reject deletion of dispatch history."""
        raise ImmutableDispatchLogError(
            f"Dispatch attempt {self.attempt_id} cannot be deleted"
        )

    @property
    def overall_status(self) -> DispatchOutcome:
        """Outcome derived from the channel results on every read."""
        return aggregate_outcome(result.status for result in self.results.all())


class ChannelResult(models.Model):
    """Delivery result for one channel of a dispatch attempt.

    Created PENDING and settled to SENT or FAILED exactly once via
    DispatchLog.record_sent / record_failed.

    Attributes:
        attempt: Parent DispatchAttempt.
        channel: Delivery channel (email, sms, push).
        status: pending, sent or failed.
        sent_at: When the sender reported success.
        failure_reason: Human-readable reason when failed.
        created_at: When the pending result was recorded.
        settled_at: When the result reached its terminal status.
    """

    attempt = models.ForeignKey(
        DispatchAttempt,
        on_delete=models.PROTECT,
        related_name="results",
        db_column="attempt_id",
        help_text="Parent dispatch attempt",
    )
    channel = models.CharField(
        max_length=10,
        help_text="Delivery channel (email, sms, push)",
    )
    status = models.CharField(
        max_length=10,
        default=ChannelStatus.PENDING.value,
        help_text="Delivery status (pending, sent, failed)",
    )
    sent_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the channel sender reported success",
    )
    failure_reason = models.TextField(
        null=True,
        blank=True,
        help_text="Why delivery failed",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the result was recorded as pending",
    )
    settled_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the result reached sent or failed",
    )

    objects = AppendOnlyQuerySet.as_manager()

    class Meta:
        """Django model metadata."""

        db_table = "dispatch_channel_results"
        ordering: ClassVar[list[str]] = ["id"]
        constraints: ClassVar[list] = [
            models.UniqueConstraint(
                fields=["attempt", "channel"],
                name="unique_channel_result_per_attempt",
            ),
        ]

    def __str__(self) -> str:
        """Return string representation of the channel result."""
        return f"{self.channel} - {self.status}"

    def __repr__(self) -> str:
        """Return detailed representation of the channel result."""
        return (
            f"<ChannelResult(attempt={self.attempt_id}, "
            f"channel={self.channel}, "
            f"status={self.status})>"
        )

    def save(self, *args, **kwargs) -> None:
        """Insert the result; settling goes through DispatchLog."""
        if not self._state.adding:
            raise ImmutableDispatchLogError(
                f"{self.channel} result of attempt {self.attempt_id} is settled "
                "through the dispatch log only"
            )
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        """Reject deletion of dispatch history."""
        raise ImmutableDispatchLogError(
            f"{self.channel} result of attempt {self.attempt_id} cannot be deleted"
        )
