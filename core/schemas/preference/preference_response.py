"""Response schema for a preference record."""

from datetime import datetime

from pydantic import Field

from core.enums.notification import Frequency
from core.schemas.base_schema_model import BaseSchemaModel


class PreferenceResponse(BaseSchemaModel):
    """Serialized PreferenceRecord."""

    user_id: str = Field(..., description="Opaque user identifier")
    email: str = Field(..., description="Contact email address")
    timezone: str = Field(..., description="IANA time zone identifier")
    topics: dict[str, bool] = Field(..., description="Topic opt-in flags")
    frequency: Frequency = Field(..., description="Delivery frequency")
    channels: dict[str, bool] = Field(..., description="Channel enabled flags")
    phone_number: str | None = Field(None, description="Address for sms")
    push_token: str | None = Field(None, description="Address for push")
    created_at: datetime = Field(..., description="When the record was created")
    updated_at: datetime = Field(..., description="When the record was last updated")
