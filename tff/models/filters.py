"""Pydantic v2 models describing what the user wants to list or export.

Criteria are resource-agnostic; :mod:`tff.services.query_builder` turns them
into the query parameters the API understands.  Every field is optional and
an unset field never reaches the wire.

Date-like fields accept either a concrete value or a time expression
(``3d``, ``2w``, ``1mo``, ``1y``, ``2026-01-15``) which is resolved at
construction time.  An unparseable expression raises
:class:`~tff.utils.errors.DateFormatError` directly.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tff.utils.errors import GeoFilterInvalidError
from tff.utils.time_expressions import parse_relative_time

MAX_PAGE_SIZE = 5000
DEFAULT_PAGE_SIZE = 25


class WorkflowStatus(str, Enum):
    """Editorial state of a resource."""

    DRAFT = "draft"
    READY_FOR_VALIDATION = "readyforvalidation"
    APPROVED = "approved"
    REJECTED = "rejected"
    DELETED = "deleted"
    ARCHIVED = "archived"


class SortField(str, Enum):
    """Sort keys. Values are the wire spelling."""

    MODIFIED = "modified"
    CREATED = "created"
    TITLE = "title"
    WORKFLOW_STATUS = "wfstatus"


class ExportFormat(str, Enum):
    EXCEL = "excel"
    UITKRANT = "uitkrant"


def split_labels(value: Any) -> list[str]:
    """Split a comma-separated string (or sequence) into non-blank labels."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(item) for item in value]
    return [item.strip() for item in items if item.strip()]


def parse_geo_center(value: str) -> tuple[float, float]:
    """Parse ``"lat,lon"`` into a coordinate pair."""
    parts = value.split(",", 1)
    if len(parts) != 2:
        raise GeoFilterInvalidError("--geo must be in format lat,lon (e.g. 52.37,4.89)")
    try:
        return float(parts[0].strip()), float(parts[1].strip())
    except ValueError as exc:
        raise GeoFilterInvalidError(
            "--geo must be in format lat,lon (e.g. 52.37,4.89)"
        ) from exc


class FilterCriteria(BaseModel):
    """Filters shared by every resource kind."""

    model_config = ConfigDict(frozen=True)

    search: str | None = Field(
        default=None,
        description="Free text. 'tag:<kw>' and 'marker:<name>' are interpreted by the API.",
    )
    markers: str | None = Field(
        default=None,
        description="Comma-separated markers; a leading '!' excludes a marker.",
    )
    keywords: list[str] = Field(default_factory=list)
    types: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    workflow_status: WorkflowStatus | None = None
    published: bool | None = Field(
        default=None, description="True/False filters on published state; None disables."
    )
    include_deleted: bool = False
    owner: str | None = None
    user_organisation: str | None = None
    external_id: str | None = None
    trc_id: str | None = None
    language: str | None = None
    updated_since: datetime | None = None
    sort_field: SortField | None = None
    sort_ascending: bool = False
    page_size: int | None = Field(default=None, gt=0)
    page_index: int | None = Field(default=None, ge=0)

    @field_validator("keywords", "types", "categories", mode="before")
    @classmethod
    def _split_labels(cls, value: Any) -> list[str]:
        return split_labels(value)

    @field_validator("updated_since", mode="before")
    @classmethod
    def _resolve_updated_since(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_relative_time(value)
        return value

    @property
    def markers_include(self) -> list[str]:
        """Markers a resource must carry."""
        return [m for m in split_labels(self.markers) if not m.startswith("!")]

    @property
    def markers_exclude(self) -> list[str]:
        """Markers a resource must not carry (the ``!`` prefix stripped)."""
        return [m[1:] for m in split_labels(self.markers) if m.startswith("!") and m[1:]]


class EventFilterCriteria(FilterCriteria):
    """Event filters: date range, location and geography on top of the shared set."""

    date_from: date | None = None
    date_to: date | None = None
    location_id: str | None = None
    city: str | None = None
    geo_center: tuple[float, float] | None = Field(
        default=None, description="(latitude, longitude)"
    )
    geo_radius: str | None = Field(
        default=None, description="Distance with unit, e.g. '10km'. Requires geo_center."
    )

    @field_validator("date_from", "date_to", mode="before")
    @classmethod
    def _resolve_date(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_relative_time(value).date()
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("geo_center", mode="before")
    @classmethod
    def _parse_geo_center(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_geo_center(value)
        return value


class ExportCriteria(BaseModel):
    """Export-only options."""

    model_config = ConfigDict(frozen=True)

    property_column_ids: str | None = Field(
        default=None,
        description="Comma-separated category property ids added as extra columns.",
    )
    format: ExportFormat = ExportFormat.EXCEL

    @field_validator("property_column_ids", mode="before")
    @classmethod
    def _join_ids(cls, value: Any) -> Any:
        if value is None or isinstance(value, str):
            return value or None
        return ",".join(split_labels(value)) or None
