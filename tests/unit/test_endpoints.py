"""Unit tests for resource kinds and endpoint resolution."""

from __future__ import annotations

import pytest

from tff.services.endpoints import (
    DICTIONARY_TYPES,
    ResourceKind,
    export_property_ids_key,
    resolve_endpoint,
)


class TestResolveEndpoint:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("event", "events"),
            ("events", "events"),
            ("Location", "locations"),
            ("LOCATIONS", "locations"),
            ("route", "routes"),
            ("venue", "venues"),
            ("venues", "venues"),
            ("eventgroup", "eventgroups"),
            ("EventGroups", "eventgroups"),
        ],
    )
    def test_singular_and_plural_spellings(self, name: str, expected: str) -> None:
        assert resolve_endpoint(name) == expected

    def test_unknown_name_passes_through(self) -> None:
        assert resolve_endpoint("podcasts") == "podcasts"

    def test_enum_member(self) -> None:
        assert resolve_endpoint(ResourceKind.EVENT_GROUP) == "eventgroups"


class TestExportPropertyIdsKey:
    def test_venue_uses_misspelled_key(self) -> None:
        assert export_property_ids_key(ResourceKind.VENUE) == "export_properyids"
        assert export_property_ids_key("venue") == "export_properyids"

    @pytest.mark.parametrize("kind", ["events", "locations", "routes", "eventgroups", "unknown"])
    def test_other_kinds_use_correct_key(self, kind: str) -> None:
        assert export_property_ids_key(kind) == "export_propertyids"


class TestResourceKind:
    def test_labels(self) -> None:
        assert ResourceKind.EVENT.singular == "event"
        assert ResourceKind.EVENT_GROUP.singular == "event group"
        assert ResourceKind.EVENT_GROUP.plural == "event groups"

    def test_from_name(self) -> None:
        assert ResourceKind.from_name(" Routes ") is ResourceKind.ROUTE
        assert ResourceKind.from_name("nope") is None

    def test_dictionary_prefixes(self) -> None:
        assert ResourceKind.EVENT_GROUP.dictionary_prefix == "eventGroup"
        assert DICTIONARY_TYPES == ("event", "location", "route", "venue", "eventGroup")
