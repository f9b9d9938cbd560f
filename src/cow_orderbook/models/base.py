"""Base model for orderbook API records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Immutable record mapped to the API's lowerCamelCase JSON.

    Unknown fields are ignored so newer API versions keep decoding.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    def to_json(self) -> str:
        """Serialize to the wire format (camelCase keys, unset optionals omitted)."""
        return self.model_dump_json(by_alias=True, exclude_none=True)
