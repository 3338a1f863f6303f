"""Editorial activity on a resource: comments and revisions.

Both endpoints answer with either a bare JSON array or a wrapper object
(``{"comments": [...]}`` / ``{"revisions": [...]}``).  The ``parse_*``
helpers accept both and return ``None`` for anything else so the caller can
fall back to printing the raw payload.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator


def _scalar_text(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


class Comment(BaseModel):
    """An internal editor note."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    text: str = ""
    author: str = ""
    created: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _scalar_text(value)


class Revision(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = ""
    author: str = ""
    created: str = ""
    comment: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _text(cls, value: Any) -> Any:
        return _scalar_text(value)


def _unwrap(payload: Any, key: str) -> list[Any] | None:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        items = payload.get(key)
        if items is None:
            return []
        if isinstance(items, list):
            return items
    return None


def parse_comments(payload: Any) -> list[Comment] | None:
    items = _unwrap(payload, "comments")
    if items is None:
        return None
    try:
        return [Comment.model_validate(item) for item in items]
    except ValidationError:
        return None


def parse_revisions(payload: Any) -> list[Revision] | None:
    items = _unwrap(payload, "revisions")
    if items is None:
        return None
    try:
        return [Revision.model_validate(item) for item in items]
    except ValidationError:
        return None
