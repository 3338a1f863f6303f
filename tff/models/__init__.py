"""tff domain models -- re-exports all public model classes.

The models are organized by concern:
    - filters.py    -- Filter and export criteria (what to ask the API for)
    - resource.py   -- Resources as returned by the API, plus list pages
    - activity.py   -- Comments and revisions on a resource
    - dictionary.py -- Categorization ontology and flattened categories
"""

from __future__ import annotations

from tff.models.activity import Comment, Revision, parse_comments, parse_revisions
from tff.models.dictionary import Categorization, CategoryTranslation, FlatCategory, Ontology
from tff.models.filters import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    EventFilterCriteria,
    ExportCriteria,
    ExportFormat,
    FilterCriteria,
    SortField,
    WorkflowStatus,
    parse_geo_center,
    split_labels,
)
from tff.models.resource import (
    Address,
    Calendar,
    ContactInfo,
    Keyword,
    Location,
    Media,
    Physical,
    Resource,
    SearchResult,
    SingleDate,
    TrcItemDetail,
    URLEntry,
    normalize_markers,
    pick_localized,
)

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "Address",
    "Calendar",
    "Categorization",
    "CategoryTranslation",
    "Comment",
    "ContactInfo",
    "EventFilterCriteria",
    "ExportCriteria",
    "ExportFormat",
    "FilterCriteria",
    "FlatCategory",
    "Keyword",
    "Location",
    "Media",
    "Ontology",
    "Physical",
    "Resource",
    "Revision",
    "SearchResult",
    "SingleDate",
    "SortField",
    "TrcItemDetail",
    "URLEntry",
    "WorkflowStatus",
    "normalize_markers",
    "parse_comments",
    "parse_geo_center",
    "parse_revisions",
    "pick_localized",
    "split_labels",
]
