"""Channel switch schemas."""

from pydantic import ConfigDict, Field

from core.schemas.base_schema_model import BaseSchemaModel


class ChannelPreferences(BaseSchemaModel):
    """Complete channels document; channels left out are disabled."""

    model_config = ConfigDict(extra="forbid")

    email: bool = Field(default=False, description="Deliver by email")
    sms: bool = Field(default=False, description="Deliver by sms")
    push: bool = Field(default=False, description="Deliver by push notification")


class ChannelPreferencesUpdate(BaseSchemaModel):
    """Partial channels document; only channels present are changed."""

    model_config = ConfigDict(extra="forbid")

    email: bool | None = None
    sms: bool | None = None
    push: bool | None = None
