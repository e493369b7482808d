"""Shared schema configuration and record helpers."""
import uuid
from datetime import datetime, UTC

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DocumentSchema(BaseModel):
    """Base for stored documents: camelCase on the wire, unknown keys kept."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_unset=True)


def new_record_id(prefix: str) -> str:
    return f"{prefix}-{uuid.uuid4().hex}"


def utc_timestamp() -> str:
    """ISO-8601 UTC timestamp as stored in createdAt/updatedAt fields."""
    return datetime.now(UTC).isoformat()
