import uuid

import django.db.models.deletion
from django.db import migrations, models

import core.models.preference_record


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="PreferenceRecord",
            fields=[
                (
                    "user_id",
                    models.CharField(
                        editable=False,
                        help_text="Opaque unique user identifier",
                        max_length=255,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        help_text="Contact email address",
                        max_length=254,
                        unique=True,
                    ),
                ),
                (
                    "timezone",
                    models.CharField(
                        default="UTC",
                        help_text="IANA time zone identifier",
                        max_length=64,
                    ),
                ),
                (
                    "topics",
                    models.JSONField(
                        default=core.models.preference_record.default_topics,
                        help_text="Topic name to opt-in flag",
                    ),
                ),
                (
                    "frequency",
                    models.CharField(
                        choices=[
                            ("daily", "daily"),
                            ("weekly", "weekly"),
                            ("monthly", "monthly"),
                            ("never", "never"),
                        ],
                        default="weekly",
                        help_text="Delivery frequency (daily, weekly, monthly, never)",
                        max_length=10,
                    ),
                ),
                (
                    "channels",
                    models.JSONField(
                        default=core.models.preference_record.default_channels,
                        help_text="Channel name to enabled flag",
                    ),
                ),
                (
                    "phone_number",
                    models.CharField(
                        blank=True,
                        help_text="Phone number for sms delivery",
                        max_length=32,
                        null=True,
                    ),
                ),
                (
                    "push_token",
                    models.CharField(
                        blank=True,
                        help_text="Device token for push delivery",
                        max_length=512,
                        null=True,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, help_text="When the record was created"
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True, help_text="When the record was last updated"
                    ),
                ),
            ],
            options={
                "db_table": "preference_records",
                "ordering": ["user_id"],
            },
        ),
        migrations.CreateModel(
            name="DispatchAttempt",
            fields=[
                (
                    "attempt_id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        help_text="Unique identifier for the dispatch attempt",
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "user_id",
                    models.CharField(
                        db_index=True,
                        help_text="User the notification was addressed to",
                        max_length=255,
                    ),
                ),
                (
                    "topic",
                    models.CharField(help_text="Notification topic", max_length=20),
                ),
                (
                    "requested_channels",
                    models.JSONField(
                        blank=True,
                        help_text=(
                            "Ordered channels requested by the caller, "
                            "null for all enabled"
                        ),
                        null=True,
                    ),
                ),
                (
                    "metadata",
                    models.JSONField(
                        blank=True,
                        default=dict,
                        help_text="Scalar key/value metadata supplied with the request",
                    ),
                ),
                (
                    "user_timezone",
                    models.CharField(
                        default="UTC",
                        help_text="User's timezone when the attempt was made",
                        max_length=64,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True, help_text="When the attempt was accepted"
                    ),
                ),
            ],
            options={
                "db_table": "dispatch_attempts",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["user_id", "-created_at"],
                        name="dispatch_user_created_idx",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="ChannelResult",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "channel",
                    models.CharField(
                        help_text="Delivery channel (email, sms, push)", max_length=10
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        default="pending",
                        help_text="Delivery status (pending, sent, failed)",
                        max_length=10,
                    ),
                ),
                (
                    "sent_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the channel sender reported success",
                        null=True,
                    ),
                ),
                (
                    "failure_reason",
                    models.TextField(
                        blank=True, help_text="Why delivery failed", null=True
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        help_text="When the result was recorded as pending",
                    ),
                ),
                (
                    "settled_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the result reached sent or failed",
                        null=True,
                    ),
                ),
                (
                    "attempt",
                    models.ForeignKey(
                        db_column="attempt_id",
                        help_text="Parent dispatch attempt",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="results",
                        to="core.dispatchattempt",
                    ),
                ),
            ],
            options={
                "db_table": "dispatch_channel_results",
                "ordering": ["id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("attempt", "channel"),
                        name="unique_channel_result_per_attempt",
                    )
                ],
            },
        ),
    ]
