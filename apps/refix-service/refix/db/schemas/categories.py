"""
Typed device catalog: category → subcategory (brand) → model → part.

Stored categories are plain documents; these schemas give callers a typed
tree to edit before writing the whole list back. Legacy shapes are
normalized on the way in:

* a model stored as a bare name string becomes ``CatalogModel(kind="name")``
  and is written back as the same string while nothing was added to it;
* ``parts`` attached to a category or a brand (instead of a model) is a
  leftover from the old schema and is dropped;
* a numeric-string ``displayOrder`` ("2") becomes a number at every level.
"""
import logging
import math
from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BeforeValidator, Field, model_validator

from .base import DocumentSchema

logger = logging.getLogger(__name__)


def parse_display_order(value: Any) -> Optional[int | float]:
    """Numeric value of a stored ``displayOrder``; numeric strings are accepted.

    Raises ValueError for anything else.
    """
    if value is None or (isinstance(value, (int, float)) and not isinstance(value, bool)):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return float(text)
        except ValueError:
            pass
    raise ValueError(f"displayOrder must be a number, got {value!r}")


def display_order_key(value: Any, missing: float = math.inf) -> float:
    """Sort key for ``displayOrder``: unparseable values sort last."""
    try:
        parsed = parse_display_order(value)
    except ValueError:
        return math.inf
    return missing if parsed is None else parsed


DisplayOrder = Annotated[Optional[Union[int, float]], BeforeValidator(parse_display_order)]


def _drop_misplaced_parts(data: Any, level: str) -> Any:
    if isinstance(data, dict) and "parts" in data:
        logger.warning(
            "Dropping parts attached at %s level of %r; parts belong to models",
            level,
            data.get("name"),
        )
        data = {k: v for k, v in data.items() if k != "parts"}
    return data


class CatalogModel(DocumentSchema):
    name: str
    image_url: str | None = None
    parts: List[str] = Field(default_factory=list)
    kind: Literal["name", "detailed"] = Field(default="detailed", exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _from_bare_name(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data, "kind": "name"}
        return data

    def to_document(self) -> Union[str, dict]:
        if self.kind == "name" and not self.parts and self.image_url is None:
            return self.name
        doc = self.model_dump(by_alias=True, exclude_unset=True)
        if self.kind == "name":
            # a bare name promoted to a detailed model always records its parts
            doc.setdefault("parts", list(self.parts))
        return doc


class Subcategory(DocumentSchema):
    id: str | None = None
    name: str
    image_url: str | None = None
    display_order: DisplayOrder = None
    models: List[CatalogModel] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _strip_parts(cls, data: Any) -> Any:
        return _drop_misplaced_parts(data, "brand")

    def to_document(self) -> dict:
        doc = self.model_dump(by_alias=True, exclude_unset=True, exclude={"models"})
        if "models" in self.model_fields_set:
            doc["models"] = [m.to_document() for m in self.models]
        return doc


class Category(DocumentSchema):
    id: str | None = None
    name: str
    icon: str | None = None
    path: str | None = None
    display_order: DisplayOrder = None
    image_url: str | None = None
    is_public: bool | None = None
    subcategories: List[Subcategory] = Field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _strip_parts(cls, data: Any) -> Any:
        return _drop_misplaced_parts(data, "category")

    def to_document(self) -> dict:
        doc = self.model_dump(by_alias=True, exclude_unset=True, exclude={"subcategories"})
        if "subcategories" in self.model_fields_set:
            doc["subcategories"] = [s.to_document() for s in self.subcategories]
        return doc


class PublicCategory(DocumentSchema):
    """Entry of the deprecated flat public-category list."""
    id: str | None = None
    name: str
    icon: str | None = None
    path: str | None = None
    display_order: DisplayOrder = None
    parent_id: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None


class PublicCategoryView(DocumentSchema):
    """Public projection of a unified category."""
    id: str
    name: str
    icon: str
    path: str
    display_order: int | float
    parent_id: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
