"""FeedFactory REST API client over an injected ``httpx.Client``.

Every call is one synchronous round trip, except :meth:`set_published`
which does two (GET then PUT).  There is no retry: transient failures
surface as :class:`ProviderUnavailableError`, HTTP errors as
:class:`APIError` with the server's message.
"""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from tff.interfaces.api_client import IFeedFactoryClient
from tff.models.resource import SearchResult
from tff.utils.errors import APIError, ProviderUnavailableError, ResponseParseError
from tff.utils.logging import get_logger

_PROVIDER = "feedfactory"
_USER_AGENT = "tff-cli/0.1.0"


def _error_message(body: bytes) -> str:
    """Pick ``message``, then ``error`` from a JSON error body, else the raw text."""
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if isinstance(payload, dict):
        for key in ("message", "error"):
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return body.decode("utf-8", errors="replace")


def decode_json(body: bytes) -> Any:
    try:
        return json.loads(body)
    except ValueError as exc:
        raise ResponseParseError(f"parsing response: {exc}", source=_PROVIDER) from exc


class FeedFactoryClient(IFeedFactoryClient):
    """Synchronous FeedFactory API client.

    Parameters
    ----------
    http_client:
        Injected ``httpx.Client``; the caller owns its lifetime.
    token:
        Bearer token sent on every request.
    base_url:
        API root, e.g. ``https://app.thefeedfactory.nl/api``.
    timeout:
        Per-request timeout in seconds.
    """

    def __init__(
        self,
        http_client: httpx.Client,
        token: str,
        base_url: str,
        timeout: float = 30.0,
    ) -> None:
        self._http = http_client
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _resource_path(endpoint: str, resource_id: str, suffix: str = "") -> str:
        path = f"/{endpoint}/{quote(resource_id, safe='')}"
        return f"{path}/{suffix}" if suffix else path

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        body: Any = None,
    ) -> bytes:
        """Perform one request and return the response body.

        Raises
        ------
        APIError
            On HTTP status >= 400.
        ProviderUnavailableError
            When the request could not be completed.
        """
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/json",
            "User-Agent": _USER_AGENT,
        }
        content: bytes | None = None
        if body is not None:
            headers["Content-Type"] = "application/json"
            content = json.dumps(body).encode("utf-8")

        url = f"{self._base_url}{path}"
        self._logger.debug("api_request", method=method, url=url, params=params or {})

        try:
            response = self._http.request(
                method,
                url,
                params=params or None,
                content=content,
                headers=headers,
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            self._logger.info("api_request_failed", method=method, url=url, error=str(exc))
            raise ProviderUnavailableError(
                f"executing request: {exc}", source=_PROVIDER
            ) from exc

        if response.status_code >= 400:
            message = _error_message(response.content)
            self._logger.info(
                "api_error", method=method, url=url, status=response.status_code
            )
            raise APIError(response.status_code, message)

        self._logger.debug(
            "api_response", method=method, url=url, status=response.status_code,
            size=len(response.content),
        )
        return response.content

    # ------------------------------------------------------------------
    # Resource collections
    # ------------------------------------------------------------------

    def list_resources(self, endpoint: str, params: dict[str, str]) -> SearchResult:
        body = self._request("GET", f"/{endpoint}", params=params)
        payload = decode_json(body)
        if not isinstance(payload, dict):
            raise ResponseParseError("parsing response: expected a JSON object", source=_PROVIDER)
        return SearchResult.model_validate(payload)

    def export_resources(self, endpoint: str, params: dict[str, str]) -> bytes:
        return self._request("GET", f"/{endpoint}", params=params)

    # ------------------------------------------------------------------
    # Single resources
    # ------------------------------------------------------------------

    def get_resource(self, endpoint: str, resource_id: str) -> bytes:
        return self._request("GET", self._resource_path(endpoint, resource_id))

    def update_resource(self, endpoint: str, resource_id: str, document: dict[str, Any]) -> None:
        self._request("PUT", self._resource_path(endpoint, resource_id), body=document)

    def delete_resource(self, endpoint: str, resource_id: str) -> None:
        self._request("DELETE", self._resource_path(endpoint, resource_id))

    def set_published(self, endpoint: str, resource_id: str, published: bool) -> None:
        """Fetch-modify-write of the ``published`` flag.

        The document is handled as an open mapping so fields this client
        does not model survive the round trip.  A concurrent edit between
        the GET and the PUT is overwritten.
        """
        document = decode_json(self.get_resource(endpoint, resource_id))
        if not isinstance(document, dict):
            raise ResponseParseError(
                "parsing resource: expected a JSON object", source=_PROVIDER
            )
        document["published"] = published
        self.update_resource(endpoint, resource_id, document)
        self._logger.info(
            "resource_published" if published else "resource_unpublished",
            endpoint=endpoint,
            resource_id=resource_id,
        )

    # ------------------------------------------------------------------
    # Comments and revisions
    # ------------------------------------------------------------------

    def get_comments(self, endpoint: str, resource_id: str) -> bytes:
        return self._request("GET", self._resource_path(endpoint, resource_id, "comments"))

    def add_comment(self, endpoint: str, resource_id: str, message: str) -> None:
        self._request(
            "POST",
            self._resource_path(endpoint, resource_id, "comments"),
            body={"text": message},
        )

    def get_revisions(self, endpoint: str, resource_id: str) -> bytes:
        return self._request("GET", self._resource_path(endpoint, resource_id, "revisions"))

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------

    def get_account_me(self) -> bytes:
        return self._request("GET", "/accounts/me")

    def list_accounts(self) -> bytes:
        return self._request("GET", "/accounts")
