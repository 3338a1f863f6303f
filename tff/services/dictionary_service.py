"""Account-scoped reference data: keywords, markers and the category ontology.

The API has no dedicated dictionary endpoints.  The first account returned
by ``GET /accounts`` carries ``{type}Keywords``, ``{type}Markers`` and
``categorizationOntology`` fields, where ``type`` is one of
``event, eventGroup, route, location, venue``.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from tff.interfaces.api_client import IFeedFactoryClient
from tff.models.dictionary import Categorization, FlatCategory, Ontology
from tff.providers.feedfactory_client import decode_json
from tff.utils.errors import DictionaryLookupError, ResponseParseError


def flatten_categories(
    categorizations: list[Categorization],
    lang: str = "nl",
    parent: str = "",
) -> list[FlatCategory]:
    """Depth-first list of every node that has a categorization id.

    Labels use the *lang* translation when present; each entry records its
    parent's label.
    """
    flat: list[FlatCategory] = []
    for node in categorizations:
        label = node.label(lang)
        if node.categorization_id:
            flat.append(
                FlatCategory(
                    id=node.categorization_id,
                    cnet_id=node.cnet_id,
                    label=label,
                    parent=parent,
                )
            )
        if node.children:
            flat.extend(flatten_categories(node.children, lang=lang, parent=label))
    return flat


class DictionaryService:
    """Reads dictionary fields from the account document."""

    def __init__(self, client: IFeedFactoryClient) -> None:
        self._client = client

    def account_data(self) -> dict[str, Any]:
        payload = decode_json(self._client.list_accounts())
        if not isinstance(payload, dict):
            raise ResponseParseError("parsing accounts: expected a JSON object")
        results = payload.get("results")
        if not isinstance(results, list) or not results:
            raise DictionaryLookupError("no accounts found")
        account = results[0]
        if not isinstance(account, dict):
            raise ResponseParseError("parsing account: expected a JSON object")
        return account

    def _field(self, key: str, label: str) -> Any:
        account = self.account_data()
        if key not in account:
            raise DictionaryLookupError(f'no {label} field "{key}" found on account')
        return account[key]

    def keywords(self, resource_type: str) -> Any:
        return self._field(f"{resource_type}Keywords", "keywords")

    def markers(self, resource_type: str) -> Any:
        return self._field(f"{resource_type}Markers", "markers")

    def ontology_payload(self) -> Any:
        account = self.account_data()
        if "categorizationOntology" not in account:
            raise DictionaryLookupError("no categorizationOntology found on account")
        return account["categorizationOntology"]

    @staticmethod
    def parse_ontology(payload: Any) -> Ontology | None:
        """Decode the ontology; ``None`` when it is not an object."""
        if not isinstance(payload, dict):
            return None
        try:
            return Ontology.model_validate(payload)
        except ValidationError:
            return None

