"""App data hash and app data documents."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .fixed_bytes import FixedBytes

APP_DATA_HASH_LENGTH = 32


class AppDataHash(FixedBytes):
    """32-byte hash of an order's app data document."""

    SIZE = APP_DATA_HASH_LENGTH

    __slots__ = ()

    def is_zero(self) -> bool:
        """Check if the hash is unset (all zero bytes)."""
        return not any(bytes(self))


class FullAppData(BaseModel):
    """Structured app data document."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="allow")

    version: str = Field(..., description="App data schema version")
    metadata: dict[str, Any] = Field(default_factory=dict, description="App data metadata")
    app_code: str | None = Field(None, alias="appCode", description="Application identifier")

    def to_json(self) -> str:
        """Serialize to the compact JSON text stored by the orderbook."""
        document = self.model_dump(by_alias=True, exclude_none=True)
        return json.dumps(document, separators=(",", ":"), sort_keys=True)


class AppData(BaseModel):
    """App data upload payload (``{"fullAppData": "<json text>"}``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    full_app_data: str = Field(..., description="App data document as JSON text")

    @classmethod
    def from_document(cls, document: FullAppData) -> "AppData":
        """Build an upload payload from a structured document.

        Args:
            document: Structured app data

        Returns:
            AppData: Payload carrying the document's compact JSON text
        """
        return cls(full_app_data=document.to_json())
