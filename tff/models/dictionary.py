"""Pydantic v2 models for the account's categorization ontology.

The ontology is a tree of categorizations.  Only nodes carrying a
``categorizationId`` can be used in ``--categories`` filters; those are the
ones :class:`FlatCategory` lists.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryTranslation(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")

    lang: str = ""
    label: str = ""


class Categorization(BaseModel):
    """One node in the ontology tree."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    cnet_id: str = Field(default="", alias="cnetID")
    name: str = Field(default="", alias="categorization")
    categorization_id: str | None = Field(default=None, alias="categorizationId")
    deprecated: bool = False
    children: list[Categorization] = Field(default_factory=list, alias="child")
    translations: list[CategoryTranslation] = Field(
        default_factory=list, alias="categoryTranslations"
    )

    @field_validator("deprecated", mode="before")
    @classmethod
    def _deprecated(cls, value: Any) -> bool:
        # The API sends either a boolean or a non-empty reason string.
        if isinstance(value, str):
            return bool(value)
        return value is True

    @field_validator("children", "translations", mode="before")
    @classmethod
    def _list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @field_validator("cnet_id", "name", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("categorization_id", mode="before")
    @classmethod
    def _id(cls, value: Any) -> str | None:
        if value is None or value == "":
            return None
        return str(value)

    def label(self, lang: str) -> str:
        """Translated label for *lang*, else the categorization name."""
        for translation in self.translations:
            if translation.lang == lang:
                return translation.label
        return self.name


class Ontology(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    last_modified: str = Field(default="", alias="lastModified")
    categorizations: list[Categorization] = Field(default_factory=list)

    @field_validator("last_modified", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("categorizations", mode="before")
    @classmethod
    def _list(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []


class FlatCategory(BaseModel):
    """A selectable (leaf) category with its parent's label."""

    model_config = ConfigDict(frozen=True)

    id: str
    cnet_id: str = Field(default="", serialization_alias="cnetId")
    label: str = ""
    parent: str = ""
