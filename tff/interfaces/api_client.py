"""Abstract base class for the FeedFactory API transport.

Services depend on this contract rather than on httpx so they can be driven
by a test double.  Implementations own the request mechanics (base URL,
authentication header, body encoding, timeouts); they receive resolved
endpoint segments and ready-made query parameters.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from tff.models.resource import SearchResult


class IFeedFactoryClient(ABC):
    """Contract for talking to the FeedFactory REST API."""

    @abstractmethod
    def list_resources(self, endpoint: str, params: dict[str, str]) -> SearchResult:
        """GET ``/{endpoint}`` with *params* and decode the result page."""

    @abstractmethod
    def export_resources(self, endpoint: str, params: dict[str, str]) -> bytes:
        """GET ``/{endpoint}`` with export *params* and return the file bytes."""

    @abstractmethod
    def get_resource(self, endpoint: str, resource_id: str) -> bytes:
        """Return the raw JSON document for one resource."""

    @abstractmethod
    def update_resource(self, endpoint: str, resource_id: str, document: dict[str, Any]) -> None:
        """PUT the whole *document* back to the resource."""

    @abstractmethod
    def delete_resource(self, endpoint: str, resource_id: str) -> None:
        """DELETE one resource."""

    @abstractmethod
    def set_published(self, endpoint: str, resource_id: str, published: bool) -> None:
        """Fetch the resource, set its ``published`` flag and PUT it back."""

    @abstractmethod
    def get_comments(self, endpoint: str, resource_id: str) -> bytes:
        """Return the raw comments payload for a resource."""

    @abstractmethod
    def add_comment(self, endpoint: str, resource_id: str, message: str) -> None:
        """Post a comment on a resource."""

    @abstractmethod
    def get_revisions(self, endpoint: str, resource_id: str) -> bytes:
        """Return the raw revision history payload for a resource."""

    @abstractmethod
    def get_account_me(self) -> bytes:
        """Return the current user's account payload."""

    @abstractmethod
    def list_accounts(self) -> bytes:
        """Return the accounts payload."""
