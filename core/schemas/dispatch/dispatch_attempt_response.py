"""Response schemas for dispatch attempts."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from core.enums.notification import ChannelStatus, DispatchOutcome
from core.models import DispatchAttempt
from core.schemas.base_schema_model import BaseSchemaModel


class ChannelResultResponse(BaseSchemaModel):
    """Result of one channel within a dispatch attempt."""

    status: ChannelStatus = Field(..., description="pending, sent or failed")
    sent_at: datetime | None = Field(None, description="When delivery succeeded")
    failure_reason: str | None = Field(None, description="Why delivery failed")


class DispatchAttemptResponse(BaseSchemaModel):
    """Serialized DispatchAttempt with its derived overall status."""

    attempt_id: UUID = Field(..., description="Dispatch attempt ID")
    user_id: str = Field(..., description="Target user")
    topic: str = Field(..., description="Notification topic")
    requested_channels: list[str] | None = Field(
        None, description="Channels requested by the caller, null for all enabled"
    )
    per_channel_results: dict[str, ChannelResultResponse] = Field(
        default_factory=dict, description="Result per attempted channel"
    )
    overall_status: DispatchOutcome = Field(..., description="Aggregated outcome")
    user_timezone: str = Field(..., description="User's timezone at dispatch")
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(..., description="When the attempt was accepted")

    @classmethod
    def from_attempt(cls, attempt: DispatchAttempt) -> "DispatchAttemptResponse":
        """Build the response, deriving overall status from the results."""
        results = list(attempt.results.all())
        return cls(
            attempt_id=attempt.attempt_id,
            user_id=attempt.user_id,
            topic=attempt.topic,
            requested_channels=attempt.requested_channels,
            per_channel_results={
                result.channel: ChannelResultResponse.model_validate(result)
                for result in results
            },
            overall_status=attempt.overall_status,
            user_timezone=attempt.user_timezone,
            metadata=attempt.metadata or {},
            created_at=attempt.created_at,
        )
