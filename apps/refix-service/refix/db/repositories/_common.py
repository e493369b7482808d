"""Helpers shared by the repositories."""
from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Union

from pydantic import BaseModel

from refix.db.schemas import DocumentSchema

RecordInput = Union[Mapping[str, Any], BaseModel]


def as_record(value: RecordInput) -> Dict[str, Any]:
    """Plain dict copy of a mapping or schema instance (camelCase keys)."""
    if isinstance(value, DocumentSchema):
        return value.to_document()
    if isinstance(value, BaseModel):
        return value.model_dump(by_alias=True, exclude_unset=True)
    return dict(value)


def slugify(value: Any) -> str:
    return re.sub(r"[^a-z0-9]+", "-", str(value or "").lower())
