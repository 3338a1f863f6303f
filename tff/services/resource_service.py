"""One flow for all five resource kinds.

Events, locations, routes, venues and event groups share the same
operations; :class:`ResourceService` is parametrized by a
:class:`~tff.services.endpoints.ResourceKind` and pulls per-kind quirks from
:mod:`tff.services.endpoints`.  Filter validation happens in the query
builder, before the client is touched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import ValidationError

from tff.interfaces.api_client import IFeedFactoryClient
from tff.models.filters import ExportCriteria, FilterCriteria
from tff.models.resource import Resource, SearchResult
from tff.providers.feedfactory_client import decode_json
from tff.services.endpoints import ResourceKind
from tff.services.query_builder import build_export_query, build_list_query
from tff.utils.errors import ResponseParseError
from tff.utils.logging import get_logger


class ResourceService:
    """List, export, inspect and edit resources of one kind."""

    def __init__(self, client: IFeedFactoryClient, kind: ResourceKind) -> None:
        self._client = client
        self._kind = kind
        self._logger = get_logger(__name__)

    @property
    def kind(self) -> ResourceKind:
        return self._kind

    @property
    def endpoint(self) -> str:
        return self._kind.value

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    def list_page(self, criteria: FilterCriteria) -> SearchResult:
        """One page of resources matching *criteria*."""
        params = build_list_query(criteria)
        self._logger.debug("list_resources", kind=self.endpoint, params=params)
        return self._client.list_resources(self.endpoint, params)

    def export(
        self,
        criteria: FilterCriteria,
        export: ExportCriteria,
        output_path: str | Path,
    ) -> int:
        """Export matching resources to *output_path*; returns the byte count."""
        params = build_export_query(self._kind, criteria, export)
        self._logger.debug("export_resources", kind=self.endpoint, params=params)
        data = self._client.export_resources(self.endpoint, params)
        Path(output_path).write_bytes(data)
        self._logger.info(
            "resources_exported", kind=self.endpoint, path=str(output_path), size=len(data)
        )
        return len(data)

    # ------------------------------------------------------------------
    # Single resources
    # ------------------------------------------------------------------

    def get_document(self, resource_id: str) -> Any:
        """The resource exactly as the API returned it."""
        return decode_json(self._client.get_resource(self.endpoint, resource_id))

    def get(self, resource_id: str) -> Resource:
        document = self.get_document(resource_id)
        if not isinstance(document, dict):
            raise ResponseParseError(f"parsing {self._kind.singular}: expected a JSON object")
        try:
            return Resource.from_api(document)
        except ValidationError as exc:
            raise ResponseParseError(
                f"parsing {self._kind.singular}: {exc.error_count()} invalid field(s)"
            ) from exc

    def delete(self, resource_id: str) -> None:
        self._client.delete_resource(self.endpoint, resource_id)
        self._logger.info("resource_deleted", kind=self.endpoint, resource_id=resource_id)

    def publish(self, resource_id: str) -> None:
        self._client.set_published(self.endpoint, resource_id, True)

    def unpublish(self, resource_id: str) -> None:
        self._client.set_published(self.endpoint, resource_id, False)

    # ------------------------------------------------------------------
    # Comments and revisions
    # ------------------------------------------------------------------

    def comments_payload(self, resource_id: str) -> Any:
        return decode_json(self._client.get_comments(self.endpoint, resource_id))

    def add_comment(self, resource_id: str, message: str) -> None:
        self._client.add_comment(self.endpoint, resource_id, message)

    def revisions_payload(self, resource_id: str) -> Any:
        return decode_json(self._client.get_revisions(self.endpoint, resource_id))
