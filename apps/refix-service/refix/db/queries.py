"""
Tutorial filter translation.

The same ``TutorialFilters`` drive both backends:

* ``matches_tutorial`` is the in-memory predicate used by the JSON file store;
* ``build_tutorial_query`` builds the SQLAlchemy statement used by the
  document store. Every filter value travels as a bound parameter.

Semantics shared by both:

* ``category`` is an exact, case-sensitive match; ``"All"`` means no filter;
* ``brand``, ``model`` and ``part`` are exact, case-sensitive matches;
* ``search`` is lowercased and matched as a substring of the lowercased
  ``title`` or ``summary``;
* filters combine with AND, empty values are ignored, and results keep
  insertion order.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel
from sqlalchemy import String, and_, func, or_, select
from sqlalchemy.sql import Select

from refix.db import models
from refix.utils.collections import ALL_CATEGORIES_SENTINEL

EXACT_MATCH_FIELDS = ("category", "brand", "model", "part")
SEARCH_FIELDS = ("title", "summary")


class TutorialFilters(BaseModel):
    category: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    part: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def coerce(cls, filters: "TutorialFilters | Mapping[str, Any] | None" = None, **kwargs) -> "TutorialFilters":
        """Accept a filters object, a plain mapping, keyword arguments or nothing."""
        if isinstance(filters, cls):
            return filters.model_copy(update=kwargs) if kwargs else filters
        data = dict(filters or {})
        data.update(kwargs)
        return cls.model_validate(data)

    def exact_matches(self) -> Dict[str, str]:
        """Field -> required value for every active exact-match filter."""
        active = {}
        for field in EXACT_MATCH_FIELDS:
            value = getattr(self, field)
            if not value:
                continue
            if field == "category" and value == ALL_CATEGORIES_SENTINEL:
                continue
            active[field] = value
        return active

    def search_term(self) -> Optional[str]:
        return self.search.lower() if self.search else None

    def is_empty(self) -> bool:
        return not self.exact_matches() and not self.search_term()


def _text_of(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def matches_tutorial(tutorial: Mapping[str, Any], filters: TutorialFilters) -> bool:
    for field, expected in filters.exact_matches().items():
        if tutorial.get(field) != expected:
            return False
    term = filters.search_term()
    if term:
        return any(term in _text_of(tutorial.get(field)).lower() for field in SEARCH_FIELDS)
    return True


def build_tutorial_query(filters: TutorialFilters) -> Select:
    doc = models.TutorialDocument
    clauses = [
        doc.body[field].as_string() == value
        for field, value in filters.exact_matches().items()
    ]
    term = filters.search_term()
    if term:
        clauses.append(
            or_(
                *(
                    func.lower(doc.body[field].as_string(), type_=String).contains(term, autoescape=True)
                    for field in SEARCH_FIELDS
                )
            )
        )
    stmt = select(doc.body)
    if clauses:
        stmt = stmt.where(and_(*clauses))
    return stmt.order_by(doc.seq)
