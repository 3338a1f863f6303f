"""Translate filter criteria into FeedFactory query parameters.

A field contributes a parameter only when it is set: empty strings, empty
label lists, ``False`` flags and non-positive page numbers are omitted
entirely.  Omission matters -- the API reads ``published=`` differently from
no ``published`` key at all.

Cross-field rules are checked here, before any request is made:

- a geo radius needs a geo center (:class:`GeoFilterInvalidError`);
- the ``uitkrant`` export format needs both date bounds
  (:class:`ExportFormatRequiresRangeError`).
"""

from __future__ import annotations

from tff.models.filters import (
    EventFilterCriteria,
    ExportCriteria,
    ExportFormat,
    FilterCriteria,
)
from tff.services.endpoints import ResourceKind, export_property_ids_key
from tff.utils.errors import ExportFormatRequiresRangeError, GeoFilterInvalidError
from tff.utils.time_expressions import format_date, format_timestamp

QueryParams = dict[str, str]


def _set(query: QueryParams, key: str, value: str | None) -> None:
    if value:
        query[key] = value


def _format_coordinate(value: float) -> str:
    text = repr(float(value))
    return text[:-2] if text.endswith(".0") else text


def _common_params(criteria: FilterCriteria) -> QueryParams:
    query: QueryParams = {}

    _set(query, "search", criteria.search)
    _set(query, "markers", criteria.markers)
    _set(query, "keywords", ",".join(criteria.keywords))
    _set(query, "types", ",".join(criteria.types))
    _set(query, "categories", ",".join(criteria.categories))
    if criteria.workflow_status is not None:
        query["wfstatus"] = criteria.workflow_status.value
    if criteria.published is not None:
        query["published"] = "true" if criteria.published else "false"
    if criteria.include_deleted:
        query["deleted"] = "true"
    _set(query, "owner", criteria.owner)
    _set(query, "userorganisation", criteria.user_organisation)
    _set(query, "trcid", criteria.trc_id)
    _set(query, "externalid", criteria.external_id)
    _set(query, "lang", criteria.language)
    if criteria.updated_since is not None:
        query["lastupdated"] = format_timestamp(criteria.updated_since)
    if criteria.sort_field is not None:
        query["sort"] = criteria.sort_field.value
    if criteria.sort_ascending:
        query["sortorder"] = "asc"
    if criteria.page_size is not None and criteria.page_size > 0:
        query["size"] = str(criteria.page_size)
    if criteria.page_index is not None and criteria.page_index > 0:
        query["page"] = str(criteria.page_index)
    return query


def build_list_query(criteria: FilterCriteria) -> QueryParams:
    """Build the ordered query for a list request.

    Event criteria get the event-only parameters appended.
    """
    event_params = _event_params_for(criteria)
    query = _common_params(criteria)
    query.update(event_params)
    return query


def _event_params_for(criteria: FilterCriteria) -> QueryParams:
    if isinstance(criteria, EventFilterCriteria):
        return build_event_params(criteria)
    return {}


def build_event_params(criteria: EventFilterCriteria) -> QueryParams:
    """Date range, location and geography parameters for events."""
    if criteria.geo_radius and criteria.geo_center is None:
        raise GeoFilterInvalidError()

    query: QueryParams = {}
    if criteria.date_from is not None:
        query["eventDateRangeStart"] = format_date(criteria.date_from)
    if criteria.date_to is not None:
        query["eventDateRangeEnd"] = format_date(criteria.date_to)
    _set(query, "locationId", criteria.location_id)
    _set(query, "city", criteria.city)
    if criteria.geo_center is not None:
        lat, lon = criteria.geo_center
        query["geo"] = f"{_format_coordinate(lat)},{_format_coordinate(lon)}"
        _set(query, "geodistance", criteria.geo_radius)
    return query


def validate_export(criteria: FilterCriteria, export: ExportCriteria) -> None:
    """Check export rules that depend on the filter criteria."""
    if export.format is ExportFormat.UITKRANT:
        has_range = (
            isinstance(criteria, EventFilterCriteria)
            and criteria.date_from is not None
            and criteria.date_to is not None
        )
        if not has_range:
            raise ExportFormatRequiresRangeError()


def build_export_query(
    kind: ResourceKind | str,
    criteria: FilterCriteria,
    export: ExportCriteria | None = None,
) -> QueryParams:
    """Build the query for an export request against *kind*.

    Parameter order follows the list query, then ``format``, then the
    property-column ids (under the key *kind* expects), then event extras.
    """
    export = export or ExportCriteria()
    validate_export(criteria, export)
    event_params = _event_params_for(criteria)

    query = _common_params(criteria)
    query["format"] = export.format.value
    _set(query, export_property_ids_key(kind), export.property_column_ids)
    query.update(event_params)
    return query
