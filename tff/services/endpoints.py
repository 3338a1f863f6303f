"""Resource kinds, their API path segments, and per-endpoint quirks.

The FeedFactory API serves five near-identical resource collections.  The
quirks that differ between them live here so the rest of the client can run
one generic flow parametrized by :class:`ResourceKind`.
"""

from __future__ import annotations

from enum import Enum

_PROPERTY_IDS_KEY = "export_propertyids"
# The venues endpoint only understands this misspelled key. Keep it until
# the remote API accepts the correct spelling.
_VENUE_PROPERTY_IDS_KEY = "export_properyids"


class ResourceKind(str, Enum):
    """The resource collections exposed by the API. Values are path segments."""

    EVENT = "events"
    LOCATION = "locations"
    ROUTE = "routes"
    VENUE = "venues"
    EVENT_GROUP = "eventgroups"

    @property
    def singular(self) -> str:
        """Human label, e.g. ``event group``."""
        return _LABELS[self][0]

    @property
    def plural(self) -> str:
        return _LABELS[self][1]

    @property
    def dictionary_prefix(self) -> str:
        """Prefix of the account fields holding this kind's keywords/markers."""
        return _DICTIONARY_PREFIXES[self]

    @classmethod
    def from_name(cls, name: str) -> ResourceKind | None:
        """Look up a kind by singular or plural spelling, case-insensitively."""
        return _ALIASES.get(name.strip().lower())


_LABELS: dict[ResourceKind, tuple[str, str]] = {
    ResourceKind.EVENT: ("event", "events"),
    ResourceKind.LOCATION: ("location", "locations"),
    ResourceKind.ROUTE: ("route", "routes"),
    ResourceKind.VENUE: ("venue", "venues"),
    ResourceKind.EVENT_GROUP: ("event group", "event groups"),
}

_DICTIONARY_PREFIXES: dict[ResourceKind, str] = {
    ResourceKind.EVENT: "event",
    ResourceKind.LOCATION: "location",
    ResourceKind.ROUTE: "route",
    ResourceKind.VENUE: "venue",
    ResourceKind.EVENT_GROUP: "eventGroup",
}

_ALIASES: dict[str, ResourceKind] = {
    "event": ResourceKind.EVENT,
    "events": ResourceKind.EVENT,
    "location": ResourceKind.LOCATION,
    "locations": ResourceKind.LOCATION,
    "route": ResourceKind.ROUTE,
    "routes": ResourceKind.ROUTE,
    "venue": ResourceKind.VENUE,
    "venues": ResourceKind.VENUE,
    "eventgroup": ResourceKind.EVENT_GROUP,
    "eventgroups": ResourceKind.EVENT_GROUP,
}

DICTIONARY_TYPES: tuple[str, ...] = tuple(_DICTIONARY_PREFIXES.values())


def resolve_endpoint(kind: ResourceKind | str) -> str:
    """Return the API path segment for *kind*.

    Unrecognized names are returned unchanged so new remote collections can
    be addressed without a client release.
    """
    if isinstance(kind, ResourceKind):
        return kind.value
    resolved = ResourceKind.from_name(kind)
    if resolved is None:
        return kind
    return resolved.value


def export_property_ids_key(kind: ResourceKind | str) -> str:
    """Query key carrying export property-column ids for *kind*."""
    if resolve_endpoint(kind) == ResourceKind.VENUE.value:
        return _VENUE_PROPERTY_IDS_KEY
    return _PROPERTY_IDS_KEY
