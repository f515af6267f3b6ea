"""PreferenceRecord model for per-user notification preferences.

One record exists per user. Topic opt-ins and channel switches are stored
as JSON documents keyed by the Topic and Channel enum values.
"""

from typing import ClassVar

from django.db import models

from core.enums.notification import Channel, Frequency, Topic


def default_topics() -> dict[str, bool]:
    """Return a topics document with every topic opted out."""
    return {topic.value: False for topic in Topic}


def default_channels() -> dict[str, bool]:
    """Return a channels document with every channel disabled."""
    return {channel.value: False for channel in Channel}


class PreferenceRecord(models.Model):
    """A user's notification preferences.

    Attributes:
        user_id: Opaque user identifier, immutable after creation.
        email: Contact address, unique across records.
        timezone: IANA zone name, used to annotate dispatch attempts.
        topics: Mapping of topic name to opt-in flag.
        frequency: Delivery frequency; NEVER suppresses every topic.
        channels: Mapping of channel name to enabled flag.
        phone_number: Delivery address for the sms channel.
        push_token: Delivery address for the push channel.
        created_at: When the record was created.
        updated_at: When the record was last updated.
    """

    user_id = models.CharField(
        primary_key=True,
        max_length=255,
        editable=False,
        help_text="Opaque unique user identifier",
    )
    email = models.EmailField(
        max_length=254,
        unique=True,
        help_text="Contact email address",
    )
    timezone = models.CharField(
        max_length=64,
        default="UTC",
        help_text="IANA time zone identifier",
    )
    topics = models.JSONField(
        default=default_topics,
        help_text="Topic name to opt-in flag",
    )
    frequency = models.CharField(
        max_length=10,
        choices=[(frequency.value, frequency.value) for frequency in Frequency],
        default=Frequency.WEEKLY.value,
        help_text="Delivery frequency (daily, weekly, monthly, never)",
    )
    channels = models.JSONField(
        default=default_channels,
        help_text="Channel name to enabled flag",
    )
    phone_number = models.CharField(
        max_length=32,
        null=True,
        blank=True,
        help_text="Phone number for sms delivery",
    )
    push_token = models.CharField(
        max_length=512,
        null=True,
        blank=True,
        help_text="Device token for push delivery",
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        help_text="When the record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the record was last updated",
    )

    class Meta:
        """Django model metadata."""

        db_table = "preference_records"
        ordering: ClassVar[list[str]] = ["user_id"]

    def __str__(self) -> str:
        """Return string representation of the preference record."""
        return f"Preferences for {self.user_id} ({self.email})"

    def __repr__(self) -> str:
        """Return detailed representation of the preference record."""
        return (
            f"<PreferenceRecord(user_id={self.user_id!r}, "
            f"frequency={self.frequency}, "
            f"channels={self.channels})>"
        )

    def address_for(self, channel: Channel) -> str | None:
        """Return the delivery address this record holds for a channel."""
        if channel == Channel.EMAIL:
            return self.email or None
        if channel == Channel.SMS:
            return self.phone_number or None
        return self.push_token or None
