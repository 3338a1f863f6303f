"""Business logic between the CLI and the FeedFactory client.

- **endpoints** -- resource kinds and per-endpoint quirks
- **query_builder** -- filter criteria to query parameters
- **resource_service** -- list/export/get/edit flow shared by all kinds
- **dictionary_service** -- keywords, markers and ontology from the account
- **output_formatter** -- terminal rendering of tables and detail views
"""

from tff.services.dictionary_service import DictionaryService, flatten_categories
from tff.services.endpoints import (
    DICTIONARY_TYPES,
    ResourceKind,
    export_property_ids_key,
    resolve_endpoint,
)
from tff.services.output_formatter import OutputFormatter
from tff.services.query_builder import (
    build_event_params,
    build_export_query,
    build_list_query,
    validate_export,
)
from tff.services.resource_service import ResourceService

__all__ = [
    "DICTIONARY_TYPES",
    "DictionaryService",
    "OutputFormatter",
    "ResourceKind",
    "ResourceService",
    "build_event_params",
    "build_export_query",
    "build_list_query",
    "export_property_ids_key",
    "flatten_categories",
    "resolve_endpoint",
    "validate_export",
]
