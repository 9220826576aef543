"""Pydantic models describing the bulk JSON dataset files."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003
from typing import Any

from pydantic import AliasChoices, AliasGenerator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel, to_pascal


def _pascal_or_camel(name: str) -> AliasChoices:
    return AliasChoices(to_pascal(name), to_camel(name), name)


def _none_to_list(value: object) -> object:
    return [] if value is None else value


def _number_to_str(value: object) -> object:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class DatasetBaseModel(BaseModel):
    model_config = ConfigDict(
        extra="ignore",
        populate_by_name=True,
        alias_generator=AliasGenerator(validation_alias=_pascal_or_camel),
    )


class ReleaseRecordPayload(DatasetBaseModel):
    id: int
    title: str
    release_year: str | None = None
    orig_release_year: str | None = None
    artists: list[int] = Field(
        default_factory=list[int],
        validation_alias=AliasChoices("Artists", "artists", "ArtistIds", "artistIds"),
    )
    artist_names: list[str] = Field(default_factory=list[str])
    genres: list[int] = Field(
        default_factory=list[int],
        validation_alias=AliasChoices("Genres", "genres", "GenreIds", "genreIds"),
    )
    genre_names: list[str] = Field(default_factory=list[str])
    live: bool = False
    label_id: int | None = None
    label_name: str | None = None
    country_id: int | None = None
    country_name: str | None = None
    format_id: int | None = None
    format_name: str | None = None
    packaging_id: int | None = None
    packaging_name: str | None = None
    label_number: str | None = None
    length_in_seconds: str | None = None
    upc: str | None = None
    links: list[dict[str, Any]] | None = None
    media: list[dict[str, Any]] | None = None
    date_added: datetime | None = None
    last_modified: datetime | None = None

    _normalize_lists = field_validator(
        "artists", "artist_names", "genres", "genre_names", mode="before"
    )(_none_to_list)
    _normalize_text = field_validator(
        "release_year", "orig_release_year", "length_in_seconds", "upc", "label_number",
        mode="before",
    )(_number_to_str)


class LookupRowPayload(DatasetBaseModel):
    id: int
    name: str
