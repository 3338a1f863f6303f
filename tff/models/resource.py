"""Pydantic v2 models for resources returned by the FeedFactory API.

The API is loose about shapes: ``markers`` arrives as an array, a
comma-joined string or null; ``contactinfo.phone`` as an object or a bare
string; nested blocks are sometimes missing or null.  The "before" validators
here decode such fields by trying interpretations in a fixed order and keep
the first structurally valid one.  Anything unrecognisable degrades to the
emptiest valid value instead of failing the resource -- only ``id`` is
required.

All models are frozen.  The one flow that modifies a fetched resource
(publish/unpublish) works on the raw mapping in
:meth:`~tff.providers.feedfactory_client.FeedFactoryClient.set_published`.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

PREFERRED_LANGUAGES: tuple[str, ...] = ("nl", "en", "de")
MISSING_TITLE = "-"

_MODEL_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


def _dict_or_none(value: Any) -> Any:
    return value if isinstance(value, dict) else None


def _dict_items(value: Any) -> list[dict[str, Any]]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, dict)]


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def normalize_markers(value: Any) -> list[str]:
    """Decode a markers field: array of strings, comma-joined string, or null."""
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    if isinstance(value, str):
        if not value:
            return []
        return value.split(",")
    return []


def pick_localized(details: list[TrcItemDetail], attr: str) -> str:
    """Best available text for *attr* across per-language details.

    Tries :data:`PREFERRED_LANGUAGES` in order; falls back to the first entry.
    """
    if not details:
        return ""
    for lang in PREFERRED_LANGUAGES:
        for detail in details:
            value = getattr(detail, attr)
            if detail.lang == lang and value:
                return value
    return getattr(details[0], attr)


class _LenientModel(BaseModel):
    """Coerces null/number scalars to text for every optional ``str`` field."""

    model_config = _MODEL_CONFIG

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any, info: Any) -> Any:
        field = cls.model_fields.get(info.field_name)
        if field is not None and field.annotation is str and not field.is_required():
            return _text(value)
        return value


class TrcItemDetail(_LenientModel):
    """Language-specific title and descriptions."""

    lang: str = ""
    title: str = ""
    short_description: str = Field(default="", alias="shortdescription")
    long_description: str = Field(default="", alias="longdescription")


class Translations(_LenientModel):
    available_languages: list[str] = Field(default_factory=list, alias="availableLanguages")
    primary_language: str = Field(default="", alias="primaryLanguage")

    @field_validator("available_languages", mode="before")
    @classmethod
    def _languages(cls, value: Any) -> list[str]:
        return normalize_markers(value)


class SingleDate(_LenientModel):
    date: str = ""
    start_time: str = Field(default="", alias="starttime")
    end_time: str = Field(default="", alias="endtime")


class Calendar(_LenientModel):
    calendar_type: str = Field(default="", alias="calendarType")
    single_dates: list[SingleDate] = Field(default_factory=list, alias="singleDates")
    cancelled: bool = False
    sold_out: bool = Field(default=False, alias="soldout")

    @field_validator("single_dates", mode="before")
    @classmethod
    def _single_dates(cls, value: Any) -> list[dict[str, Any]]:
        return _dict_items(value)

    @field_validator("cancelled", "sold_out", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return value is True


class Address(_LenientModel):
    street: str = ""
    house_nr: str = Field(default="", alias="housenr")
    zip_code: str = Field(default="", alias="zipcode")
    city: str = ""
    country: str = ""
    latitude: float = 0.0
    longitude: float = 0.0

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coordinate(cls, value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0


class Location(_LenientModel):
    label: str = ""
    address: Address | None = None

    @field_validator("address", mode="before")
    @classmethod
    def _address(cls, value: Any) -> Any:
        return _dict_or_none(value)


class Physical(_LenientModel):
    """Route attributes."""

    distance: str = ""
    duration: str = ""
    route_type: str = Field(default="", alias="routetype")


class ContactPhone(_LenientModel):
    number: str = ""


class ContactMail(_LenientModel):
    email: str = ""


class ContactURL(_LenientModel):
    url: str = ""
    target_language: str = Field(default="", alias="targetLanguage")
    url_service_type: str = Field(default="", alias="urlServiceType")


class ContactInfo(_LenientModel):
    """Contact details.

    ``phone`` and ``mail`` keep their raw JSON value because the API sends
    either a structured object or a bare string there.
    """

    phone: Any = None
    mail: Any = None
    phones: list[ContactPhone] = Field(default_factory=list)
    mails: list[ContactMail] = Field(default_factory=list)
    urls: list[ContactURL] = Field(default_factory=list)

    @field_validator("phones", "mails", "urls", mode="before")
    @classmethod
    def _entries(cls, value: Any) -> list[dict[str, Any]]:
        return _dict_items(value)

    @staticmethod
    def _resolve(entries: list[Any], attr: str, single: Any) -> str:
        if entries and getattr(entries[0], attr):
            return getattr(entries[0], attr)
        if isinstance(single, dict):
            value = _text(single.get(attr))
            if value:
                return value
        if isinstance(single, str) and single:
            return single
        return ""

    def get_phone(self) -> str:
        """Primary phone: ``phones[0]``, then ``phone`` as object, then as string."""
        return self._resolve(self.phones, "number", self.phone)

    def get_email(self) -> str:
        """Primary email: ``mails[0]``, then ``mail`` as object, then as string."""
        return self._resolve(self.mails, "email", self.mail)


class Media(_LenientModel):
    url: str = ""
    main: bool = False
    media_type: str = Field(default="", alias="mediatype")
    title: str = ""

    @field_validator("main", mode="before")
    @classmethod
    def _main(cls, value: Any) -> bool:
        return value is True


class URLEntry(_LenientModel):
    url: str = ""
    url_type: str = Field(default="", alias="urltype")
    label: str = ""


class Keyword(_LenientModel):
    id: str = ""
    label: str = ""
    value: str = ""

    @property
    def display(self) -> str:
        return self.label or self.value


class Resource(_LenientModel):
    """One event, location, route, venue or event group."""

    id: str
    slug: str = ""
    types: list[str] = Field(default_factory=list)
    published: bool = False
    offline: bool = False
    deleted: bool = False
    workflow_status: str = Field(default="", alias="wfstatus")
    last_updated: str = Field(default="", alias="lastupdated")
    last_updated_by: str = Field(default="", alias="lastupdatedby")
    created: str = Field(default="", alias="creationdate")
    owner: str = ""
    calendar: Calendar | None = None
    location: Location | None = None
    physical: Physical | None = None
    contact_info: ContactInfo | None = Field(default=None, alias="contactinfo")
    media: list[Media] = Field(default_factory=list)
    urls: list[URLEntry] = Field(default_factory=list)
    markers: list[str] = Field(default_factory=list)
    keywords: list[Keyword] = Field(default_factory=list)
    user_organisation: str = Field(default="", alias="userorganisation")
    trc_id: str = Field(default="", alias="trcid")
    external_id: str = Field(default="", alias="externalid")
    entity_type: str = Field(default="", alias="entitytype")
    details: list[TrcItemDetail] = Field(default_factory=list, alias="trcItemDetails")
    translations: Translations | None = None

    @field_validator("id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> Any:
        # None and non-scalar ids stay invalid so a document without identity fails.
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("published", "offline", "deleted", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        return value is True

    @field_validator("calendar", "location", "physical", "contact_info", "translations", mode="before")
    @classmethod
    def _nested(cls, value: Any) -> Any:
        return _dict_or_none(value)

    @field_validator("media", "urls", "details", mode="before")
    @classmethod
    def _entries(cls, value: Any) -> list[dict[str, Any]]:
        return _dict_items(value)

    @field_validator("types", "markers", mode="before")
    @classmethod
    def _markers(cls, value: Any) -> list[str]:
        return normalize_markers(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _keywords(cls, value: Any) -> list[dict[str, Any]]:
        if not isinstance(value, list):
            return []
        items: list[dict[str, Any]] = []
        for item in value:
            if isinstance(item, dict):
                items.append(item)
            elif isinstance(item, str) and item:
                items.append({"label": item})
        return items

    @classmethod
    def from_api(cls, document: dict[str, Any]) -> Resource:
        """Reconcile one JSON document from the API."""
        return cls.model_validate(document)

    # -- Derived accessors -------------------------------------------------

    @property
    def title(self) -> str:
        """Title in nl, en or de, else the first entry's, else ``"-"``."""
        return pick_localized(self.details, "title") or MISSING_TITLE

    @property
    def short_description(self) -> str:
        return pick_localized(self.details, "short_description")

    @property
    def city(self) -> str:
        if self.location is not None and self.location.address is not None:
            return self.location.address.city
        return ""

    @property
    def first_date(self) -> str:
        if self.calendar is not None and self.calendar.single_dates:
            return self.calendar.single_dates[0].date
        return ""

    @property
    def phone(self) -> str:
        return self.contact_info.get_phone() if self.contact_info else ""

    @property
    def email(self) -> str:
        return self.contact_info.get_email() if self.contact_info else ""


class SearchResult(BaseModel):
    """One page of a list endpoint.

    ``results`` keeps the raw documents so ``--json`` output can echo the
    API unchanged.
    """

    model_config = ConfigDict(frozen=True)

    size: int = 0
    page: int = 0
    hits: int = 0
    results: list[dict[str, Any]] = Field(default_factory=list)

    @field_validator("size", "page", "hits", mode="before")
    @classmethod
    def _count(cls, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return 0

    @field_validator("results", mode="before")
    @classmethod
    def _results(cls, value: Any) -> list[dict[str, Any]]:
        return _dict_items(value)

    def resources(self) -> list[Resource]:
        """Reconciled results; documents without a usable ``id`` are skipped."""
        resources: list[Resource] = []
        for document in self.results:
            try:
                resources.append(Resource.from_api(document))
            except ValidationError:
                continue
        return resources
