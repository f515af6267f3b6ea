"""Base pydantic model for centralized configuration of schema definitions."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchemaModel(BaseModel):
    """Base pydantic model shared by every request and response schema.

    Fields are exposed as camelCase on the wire while accepting snake_case
    input, enums are stored as their values, and unknown keys are ignored
    unless a schema opts into ``extra="forbid"``.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        extra="ignore",
        str_strip_whitespace=True,
    )

    def to_response(self) -> dict:
        """Dump to a JSON-ready dict using camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)
