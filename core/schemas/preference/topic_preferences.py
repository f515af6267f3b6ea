"""Topic opt-in schemas."""

from pydantic import ConfigDict, Field

from core.schemas.base_schema_model import BaseSchemaModel


class TopicPreferences(BaseSchemaModel):
    """Complete topics document; topics left out are opted out."""

    model_config = ConfigDict(extra="forbid")

    marketing: bool = Field(default=False, description="Marketing messages")
    newsletter: bool = Field(default=False, description="Newsletter issues")
    updates: bool = Field(default=False, description="Product and account updates")


class TopicPreferencesUpdate(BaseSchemaModel):
    """Partial topics document; only topics present are changed."""

    model_config = ConfigDict(extra="forbid")

    marketing: bool | None = None
    newsletter: bool | None = None
    updates: bool | None = None
