"""Unit tests for comment, revision and ontology payload decoding."""

from __future__ import annotations

from typing import Any

import pytest

from tff.models.activity import parse_comments, parse_revisions
from tff.models.dictionary import Categorization, FlatCategory, Ontology


class TestParseComments:
    def test_bare_array(self) -> None:
        comments = parse_comments([{"id": 1, "text": "Check dates", "author": "ann", "created": "2026-01-02"}])
        assert comments is not None
        assert comments[0].id == "1"
        assert comments[0].text == "Check dates"

    def test_wrapper_object(self) -> None:
        comments = parse_comments({"comments": [{"text": "ok"}]})
        assert [c.text for c in comments] == ["ok"]

    def test_wrapper_without_items(self) -> None:
        assert parse_comments({"comments": None}) == []
        assert parse_comments({}) == []

    @pytest.mark.parametrize("payload", ["text", 42, None, {"comments": "x"}, [["nested"]]])
    def test_unknown_shapes(self, payload: Any) -> None:
        assert parse_comments(payload) is None


class TestParseRevisions:
    def test_bare_array(self) -> None:
        revisions = parse_revisions([{"author": "bob", "created": "2026-01-03", "comment": None}])
        assert revisions[0].author == "bob"
        assert revisions[0].comment == ""

    def test_wrapper_object(self) -> None:
        revisions = parse_revisions({"revisions": [{"comment": "typo"}]})
        assert [r.comment for r in revisions] == ["typo"]

    def test_unknown_shape(self) -> None:
        assert parse_revisions("nope") is None


class TestOntologyModels:
    def test_tree(self, account_payload: dict[str, Any]) -> None:
        ontology = Ontology.model_validate(
            account_payload["results"][0]["categorizationOntology"]
        )
        root = ontology.categorizations[0]

        assert ontology.last_modified == "2025-12-01"
        assert root.cnet_id == "1"
        assert root.categorization_id is None
        assert [child.categorization_id for child in root.children] == ["cat-jazz", "cat-classic"]
        assert root.children[1].deprecated is True

    def test_label_translation(self) -> None:
        node = Categorization.model_validate(
            {"categorization": "Muziek", "categoryTranslations": [{"lang": "en", "label": "Music"}]}
        )
        assert node.label("en") == "Music"
        assert node.label("de") == "Muziek"

    @pytest.mark.parametrize(("value", "expected"), [("obsolete", True), ("", False), (None, False)])
    def test_deprecated_reason_string(self, value: Any, expected: bool) -> None:
        assert Categorization.model_validate({"deprecated": value}).deprecated is expected

    def test_numeric_categorization_id(self) -> None:
        assert Categorization.model_validate({"categorizationId": 17}).categorization_id == "17"

    def test_flat_category_serializes_cnet_id_in_camel_case(self) -> None:
        flat = FlatCategory(id="c1", cnet_id="1.1", label="Jazz", parent="Muziek")
        assert flat.model_dump(by_alias=True) == {
            "id": "c1", "cnetId": "1.1", "label": "Jazz", "parent": "Muziek",
        }
