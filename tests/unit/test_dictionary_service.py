"""Unit tests for DictionaryService and category flattening."""

from __future__ import annotations

import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from tff.models.dictionary import Ontology
from tff.services.dictionary_service import DictionaryService, flatten_categories
from tff.utils.errors import DictionaryLookupError, ResponseParseError


def _service(mock_client: MagicMock, payload: Any) -> DictionaryService:
    mock_client.list_accounts.return_value = json.dumps(payload).encode()
    return DictionaryService(mock_client)


class TestAccountFields:
    def test_keywords(self, mock_client: MagicMock, account_payload: dict[str, Any]) -> None:
        assert _service(mock_client, account_payload).keywords("event") == ["jazz", "pop"]

    def test_markers(self, mock_client: MagicMock, account_payload: dict[str, Any]) -> None:
        assert _service(mock_client, account_payload).markers("event") == ["summer"]

    def test_empty_field_is_returned(
        self, mock_client: MagicMock, account_payload: dict[str, Any]
    ) -> None:
        assert _service(mock_client, account_payload).keywords("eventGroup") == []

    def test_missing_field(self, mock_client: MagicMock, account_payload: dict[str, Any]) -> None:
        with pytest.raises(DictionaryLookupError, match="routeMarkers"):
            _service(mock_client, account_payload).markers("route")

    def test_no_accounts(self, mock_client: MagicMock) -> None:
        with pytest.raises(DictionaryLookupError, match="no accounts found"):
            _service(mock_client, {"results": []}).keywords("event")

    def test_non_object_payload(self, mock_client: MagicMock) -> None:
        with pytest.raises(ResponseParseError):
            _service(mock_client, ["x"]).keywords("event")

    def test_missing_ontology(self, mock_client: MagicMock) -> None:
        with pytest.raises(DictionaryLookupError):
            _service(mock_client, {"results": [{"id": "a"}]}).ontology_payload()


class TestOntology:
    def test_parse(self, mock_client: MagicMock, account_payload: dict[str, Any]) -> None:
        service = _service(mock_client, account_payload)
        ontology = service.parse_ontology(service.ontology_payload())
        assert isinstance(ontology, Ontology)
        assert ontology.categorizations[0].name == "Muziek"

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            "tree",
            [1],
            {"categorizations": [{"categoryTranslations": [{"lang": ["nl"]}]}]},
        ],
    )
    def test_unparseable_payload(self, payload: Any) -> None:
        assert DictionaryService.parse_ontology(payload) is None


class TestFlattenCategories:
    def _ontology(self, account_payload: dict[str, Any]) -> Ontology:
        return Ontology.model_validate(account_payload["results"][0]["categorizationOntology"])

    def test_only_nodes_with_ids(self, account_payload: dict[str, Any]) -> None:
        flat = flatten_categories(self._ontology(account_payload).categorizations)
        assert [(c.id, c.cnet_id, c.label, c.parent) for c in flat] == [
            ("cat-jazz", "1.1", "Jazz", "Muziek"),
            ("cat-classic", "1.2", "Klassiek", "Muziek"),
        ]

    def test_labels_follow_language(self, account_payload: dict[str, Any]) -> None:
        flat = flatten_categories(self._ontology(account_payload).categorizations, lang="en")
        assert [(c.label, c.parent) for c in flat] == [
            ("Jazz EN", "Music"),
            ("Klassiek", "Music"),
        ]

    def test_empty(self) -> None:
        assert flatten_categories([]) == []
