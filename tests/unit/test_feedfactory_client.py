"""Unit tests for the FeedFactory API client with a mocked httpx.Client."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from tff.providers.feedfactory_client import FeedFactoryClient, decode_json
from tff.utils.errors import APIError, ProviderUnavailableError, ResponseParseError

_BASE = "https://app.thefeedfactory.nl/api"


def _client(*responses: httpx.Response) -> tuple[FeedFactoryClient, MagicMock]:
    http = MagicMock(spec=httpx.Client)
    http.request.side_effect = list(responses)
    return FeedFactoryClient(http_client=http, token="secret", base_url=_BASE + "/", timeout=5.0), http


def _sent_body(call: Any) -> Any:
    return json.loads(call.kwargs["content"])


# ======================================================================
# Request mechanics
# ======================================================================


class TestRequest:
    def test_list_sends_params_and_auth(self, search_payload: dict[str, Any]) -> None:
        client, http = _client(httpx.Response(200, json=search_payload))

        page = client.list_resources("events", {"search": "jazz", "size": "25"})

        assert page.hits == 120
        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        assert (method, url) == ("GET", f"{_BASE}/events")
        assert kwargs["params"] == {"search": "jazz", "size": "25"}
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["headers"]["Accept"] == "application/json"
        assert "Content-Type" not in kwargs["headers"]
        assert kwargs["content"] is None
        assert kwargs["timeout"] == 5.0

    def test_empty_params_are_not_sent(self) -> None:
        client, http = _client(httpx.Response(200, json={"results": []}))
        client.list_resources("locations", {})
        assert http.request.call_args.kwargs["params"] is None

    def test_resource_id_is_path_escaped(self) -> None:
        client, http = _client(httpx.Response(200, json={"id": "a/b"}))
        client.get_resource("events", "a/b c")
        assert http.request.call_args.args[1] == f"{_BASE}/events/a%2Fb%20c"

    def test_export_returns_raw_bytes(self) -> None:
        client, _ = _client(httpx.Response(200, content=b"PK\x03\x04xlsx"))
        assert client.export_resources("events", {"format": "excel"}) == b"PK\x03\x04xlsx"

    def test_list_requires_json_object(self) -> None:
        client, _ = _client(httpx.Response(200, json=[1, 2]))
        with pytest.raises(ResponseParseError):
            client.list_resources("events", {})


class TestErrors:
    def test_status_error_uses_message_field(self) -> None:
        client, _ = _client(httpx.Response(404, json={"message": "Event not found", "error": "x"}))

        with pytest.raises(APIError) as exc_info:
            client.get_resource("events", "missing")

        assert exc_info.value.status_code == 404
        assert str(exc_info.value) == "API error (404): Event not found"

    def test_status_error_falls_back_to_error_field(self) -> None:
        client, _ = _client(httpx.Response(403, json={"error": "Forbidden"}))
        with pytest.raises(APIError, match="Forbidden"):
            client.delete_resource("venues", "v1")

    def test_status_error_falls_back_to_raw_body(self) -> None:
        client, _ = _client(httpx.Response(502, content=b"Bad Gateway"))
        with pytest.raises(APIError, match=r"API error \(502\): Bad Gateway"):
            client.get_account_me()

    def test_transport_failure(self) -> None:
        http = MagicMock(spec=httpx.Client)
        http.request.side_effect = httpx.ConnectError("connection refused")
        client = FeedFactoryClient(http_client=http, token="t", base_url=_BASE)

        with pytest.raises(ProviderUnavailableError, match="connection refused"):
            client.list_accounts()

    def test_timeout_is_unavailable(self) -> None:
        http = MagicMock(spec=httpx.Client)
        http.request.side_effect = httpx.ReadTimeout("timed out")
        client = FeedFactoryClient(http_client=http, token="t", base_url=_BASE)

        with pytest.raises(ProviderUnavailableError):
            client.get_comments("events", "e1")

    def test_decode_json_rejects_non_json(self) -> None:
        with pytest.raises(ResponseParseError):
            decode_json(b"<html>")


# ======================================================================
# Publish / unpublish
# ======================================================================


class TestSetPublished:
    def test_fetch_modify_write(self, event_document: dict[str, Any]) -> None:
        event_document["published"] = False
        client, http = _client(
            httpx.Response(200, json=event_document),
            httpx.Response(200, json={}),
        )

        client.set_published("events", "ev-001", True)

        get_call, put_call = http.request.call_args_list
        assert get_call.args == ("GET", f"{_BASE}/events/ev-001")
        assert put_call.args == ("PUT", f"{_BASE}/events/ev-001")
        assert put_call.kwargs["headers"]["Content-Type"] == "application/json"

        sent = _sent_body(put_call)
        assert sent["published"] is True
        assert sent["unknownField"] == {"kept": "as-is"}
        assert {k: v for k, v in sent.items() if k != "published"} == {
            k: v for k, v in event_document.items() if k != "published"
        }

    def test_unpublish(self) -> None:
        client, http = _client(
            httpx.Response(200, json={"id": "r1", "published": True}),
            httpx.Response(204),
        )
        client.set_published("routes", "r1", False)
        assert _sent_body(http.request.call_args_list[1]) == {"id": "r1", "published": False}

    def test_failed_fetch_skips_write(self) -> None:
        client, http = _client(httpx.Response(404, json={"message": "gone"}))
        with pytest.raises(APIError):
            client.set_published("events", "e1", True)
        assert http.request.call_count == 1

    def test_non_object_document_is_rejected(self) -> None:
        client, http = _client(httpx.Response(200, json=["not", "a", "resource"]))
        with pytest.raises(ResponseParseError):
            client.set_published("events", "e1", True)
        assert http.request.call_count == 1


# ======================================================================
# Comments and accounts
# ======================================================================


class TestCommentsAndAccounts:
    def test_add_comment_posts_text(self) -> None:
        client, http = _client(httpx.Response(201, json={"id": "c1"}))

        client.add_comment("eventgroups", "g1", "Please review")

        method, url = http.request.call_args.args
        assert (method, url) == ("POST", f"{_BASE}/eventgroups/g1/comments")
        assert _sent_body(http.request.call_args) == {"text": "Please review"}

    def test_revisions_path(self) -> None:
        client, http = _client(httpx.Response(200, json=[]))
        assert client.get_revisions("locations", "l1") == b"[]"
        assert http.request.call_args.args[1] == f"{_BASE}/locations/l1/revisions"

    def test_account_paths(self) -> None:
        client, http = _client(
            httpx.Response(200, json={"name": "me"}),
            httpx.Response(200, json={"results": []}),
        )
        client.get_account_me()
        client.list_accounts()
        urls = [call.args[1] for call in http.request.call_args_list]
        assert urls == [f"{_BASE}/accounts/me", f"{_BASE}/accounts"]
