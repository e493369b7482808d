from typing import List, Union

from pydantic import BaseModel, Field

from .base import DocumentSchema


class NamedLink(BaseModel):
    """A tool or part with an optional purchase/reference link."""
    name: str
    url: str | None = None


# A tool or part is either a plain name or {name, url}
ToolOrPart = Union[str, NamedLink]


class TutorialStep(DocumentSchema):
    number: int | None = None
    title: str | None = None
    description: str | None = None
    images: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)
    tips: List[str] = Field(default_factory=list)
    tools: List[ToolOrPart] = Field(default_factory=list)
    parts: List[ToolOrPart] = Field(default_factory=list)


class TutorialBase(DocumentSchema):
    title: str | None = None
    category: str | None = None
    brand: str | None = None
    model: str | None = None
    part: str | None = None
    related_parts: List[str] | None = None
    difficulty: str | None = None
    duration_minutes: int | str | None = None
    summary: str | None = None
    tools: List[ToolOrPart] | None = None
    video_url: str | None = None
    thumbnail_url: str | None = None
    steps: List[TutorialStep] | None = None


class TutorialCreate(TutorialBase):
    id: str | None = None


class TutorialUpdate(TutorialBase):
    pass


class Tutorial(TutorialBase):
    id: str
