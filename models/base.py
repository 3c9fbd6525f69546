"""
Base document classes.
"""

from datetime import datetime, timezone
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision, e.g. 2025-03-01T09:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class CamelModel(BaseModel):
    """
    Snake_case attributes, camelCase on the wire and in the store.

    Construct with either spelling; dump with to_document()/to_public().
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",  # Ignore unknown fields from clients and legacy documents
    )


class Document(CamelModel):
    """
    Base for all persisted entities.

    `id` is assigned by the store on insert and never written inside the
    document body.
    """
    id: Optional[str] = None

    def to_document(self) -> dict:
        """Body to write to the store (no id, no unset optional flags)."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)

    def to_public(self) -> dict:
        """Full camelCase representation including id."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_document(cls, data: dict):
        """Build from a stored document (as returned by Collection.query/get)."""
        return cls.model_validate(data)
