"""Request schema for creating a preference record."""

from pydantic import ConfigDict, EmailStr, Field, field_validator

from core.enums.notification import Frequency
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.preference.channel_preferences import ChannelPreferences
from core.schemas.preference.topic_preferences import TopicPreferences
from core.schemas.validators import validate_timezone

PHONE_NUMBER_PATTERN = r"^\+?[0-9]{6,15}$"


class PreferenceCreateRequest(BaseSchemaModel):
    """Request schema for a user's first preference submission.

    Attributes:
        user_id: Opaque user identifier; becomes the record's immutable key.
        email: Contact address, unique across records.
        timezone: IANA zone name (default UTC).
        topics: Topic opt-ins; omitted topics are opted out.
        frequency: Delivery frequency (default weekly).
        channels: Channel switches; omitted channels are disabled.
        phone_number: Address for the sms channel.
        push_token: Address for the push channel.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "userId": "user-42",
                "email": "ada@example.com",
                "timezone": "Europe/London",
                "topics": {"marketing": False, "newsletter": True, "updates": True},
                "frequency": "weekly",
                "channels": {"email": True, "sms": True, "push": False},
                "phoneNumber": "+447700900123",
            }
        }
    )

    user_id: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., description="Contact email address")
    timezone: str = Field(default="UTC", max_length=64)
    topics: TopicPreferences = Field(default_factory=TopicPreferences)
    frequency: Frequency = Field(default=Frequency.WEEKLY)
    channels: ChannelPreferences = Field(default_factory=ChannelPreferences)
    phone_number: str | None = Field(default=None, pattern=PHONE_NUMBER_PATTERN)
    push_token: str | None = Field(default=None, min_length=1, max_length=512)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str) -> str:
        """Reject unknown IANA zones."""
        return validate_timezone(value)
