"""Request schema for the notification send endpoint."""

from pydantic import ConfigDict, Field, field_validator

from core.enums.notification import Channel, Topic
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.validators import validate_metadata

MetadataValue = str | int | float | bool | None


class NotificationSendRequest(BaseSchemaModel):
    """Request to dispatch one notification to a user.

    Attributes:
        user_id: User whose preference record decides eligibility.
        topic: Notification topic (marketing, newsletter, updates).
        channels: Channels to restrict delivery to, in order. Omit to use
            every channel the user has enabled for the topic.
        metadata: Flat scalar key/value payload handed to channel senders.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "user-42",
                "topic": "updates",
                "channels": ["email", "sms"],
                "metadata": {"subject": "Your order shipped", "orderId": 1881},
            }
        }
    )

    user_id: str = Field(..., min_length=1, max_length=255)
    topic: Topic = Field(..., description="Notification topic")
    channels: list[Channel] | None = Field(
        default=None,
        description="Requested channels; null means all enabled channels",
    )
    metadata: dict[str, MetadataValue] = Field(default_factory=dict)

    @field_validator("metadata")
    @classmethod
    def check_metadata(cls, value: dict[str, MetadataValue]) -> dict:
        """Apply metadata size and key bounds."""
        return validate_metadata(value)
