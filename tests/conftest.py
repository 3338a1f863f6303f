"""Shared pytest fixtures for the tff test suite."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock

import pytest

from tff.interfaces.api_client import IFeedFactoryClient
from tff.models.resource import SearchResult


# ---------------------------------------------------------------------------
# API documents
# ---------------------------------------------------------------------------


@pytest.fixture
def event_document() -> dict[str, Any]:
    """A fully populated event as returned by ``GET /events/{id}``."""
    return {
        "id": "ev-001",
        "slug": "jazz-in-het-park",
        "trcid": "TRC-42",
        "externalid": "EXT-7",
        "wfstatus": "approved",
        "published": True,
        "deleted": False,
        "owner": "editor@example.nl",
        "userorganisation": "Gemeente Utrecht",
        "entitytype": "EVENEMENT",
        "creationdate": "2026-01-02T09:00:00Z",
        "lastupdated": "2026-01-10T12:30:00Z",
        "types": ["concert", "festival"],
        "markers": "summer,outdoor",
        "keywords": [{"id": "k1", "label": "Jazz"}, {"value": "live"}],
        "trcItemDetails": [
            {"lang": "en", "title": "Jazz in the Park", "shortdescription": "Free jazz."},
            {"lang": "nl", "title": "Jazz in het Park", "shortdescription": "Gratis jazz."},
        ],
        "location": {
            "label": "Wilhelminapark",
            "address": {
                "street": "Wilhelminapark",
                "housenr": "1",
                "zipcode": "3581 NA",
                "city": "Utrecht",
                "latitude": 52.0859,
                "longitude": "5.1375",
            },
        },
        "calendar": {
            "calendarType": "SINGLEDATES",
            "singleDates": [
                {"date": "2026-07-04", "starttime": "14:00", "endtime": "22:00"},
                {"date": "2026-07-05", "starttime": "14:00"},
            ],
        },
        "contactinfo": {
            "phone": {"number": "030-1234567"},
            "mail": "info@jazzpark.nl",
            "urls": [{"url": "https://jazzpark.nl", "urlServiceType": "general"}],
        },
        "media": [
            {"url": "https://cdn.example.nl/poster.jpg", "mediatype": "poster", "main": True},
        ],
        "urls": [{"url": "https://tickets.example.nl", "urltype": "booking"}],
        "unknownField": {"kept": "as-is"},
    }


@pytest.fixture
def route_document() -> dict[str, Any]:
    return {
        "id": "rt-9",
        "wfstatus": "draft",
        "published": False,
        "trcItemDetails": [{"lang": "de", "title": "Rheinradweg"}],
        "physical": {"routetype": "cycling", "distance": "42 km", "duration": "3h"},
        "markers": None,
    }


@pytest.fixture
def search_payload(event_document: dict[str, Any]) -> dict[str, Any]:
    """One page of a list response with a single event."""
    return {"size": 25, "page": 0, "hits": 120, "results": [event_document]}


@pytest.fixture
def account_payload() -> dict[str, Any]:
    """``GET /accounts`` response carrying the dictionary fields."""
    return {
        "results": [
            {
                "id": "acc-1",
                "eventKeywords": ["jazz", "pop"],
                "eventMarkers": ["summer"],
                "eventGroupKeywords": [],
                "categorizationOntology": {
                    "lastModified": "2025-12-01",
                    "categorizations": [
                        {
                            "cnetID": "1",
                            "categorization": "Muziek",
                            "categoryTranslations": [
                                {"lang": "nl", "label": "Muziek"},
                                {"lang": "en", "label": "Music"},
                            ],
                            "child": [
                                {
                                    "cnetID": "1.1",
                                    "categorization": "Jazz",
                                    "categorizationId": "cat-jazz",
                                    "categoryTranslations": [{"lang": "en", "label": "Jazz EN"}],
                                },
                                {
                                    "cnetID": "1.2",
                                    "categorization": "Klassiek",
                                    "categorizationId": "cat-classic",
                                    "deprecated": True,
                                },
                            ],
                        },
                    ],
                },
            }
        ]
    }


# ---------------------------------------------------------------------------
# Client doubles
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_client(search_payload: dict[str, Any]) -> MagicMock:
    """An IFeedFactoryClient double with a one-event list page."""
    client = MagicMock(spec=IFeedFactoryClient)
    client.list_resources.return_value = SearchResult.model_validate(search_payload)
    return client
