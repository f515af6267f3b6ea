"""Request schema for partially updating a preference record."""

from typing import Any

from pydantic import EmailStr, Field, field_validator, model_validator

from core.enums.notification import Frequency
from core.schemas.base_schema_model import BaseSchemaModel
from core.schemas.preference.channel_preferences import ChannelPreferencesUpdate
from core.schemas.preference.preference_create_request import PHONE_NUMBER_PATTERN
from core.schemas.preference.topic_preferences import TopicPreferencesUpdate
from core.schemas.validators import validate_timezone


class PreferenceUpdateRequest(BaseSchemaModel):
    """Partial update of a preference record.

    Every field is independently optional. ``topics`` and ``channels`` merge
    key by key, so ``{"channels": {"sms": false}}`` leaves the other
    channels, every topic and the frequency untouched. ``userId`` is
    immutable and ignored if sent.
    """

    email: EmailStr | None = None
    timezone: str | None = Field(default=None, max_length=64)
    topics: TopicPreferencesUpdate | None = None
    frequency: Frequency | None = None
    channels: ChannelPreferencesUpdate | None = None
    phone_number: str | None = Field(default=None, pattern=PHONE_NUMBER_PATTERN)
    push_token: str | None = Field(default=None, min_length=1, max_length=512)

    @field_validator("timezone")
    @classmethod
    def check_timezone(cls, value: str | None) -> str | None:
        """Reject unknown IANA zones."""
        if value is None:
            return value
        return validate_timezone(value)

    @model_validator(mode="after")
    def check_not_empty(self):
        """Require at least one field to change."""
        if not self.changes():
            raise ValueError("At least one preference field must be provided")
        return self

    def changes(self) -> dict[str, Any]:
        """Return only the fields the caller set to a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)
