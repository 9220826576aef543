"""Pydantic models describing the Discogs collection API payloads."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class DiscogsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Pagination(DiscogsBaseModel):
    page: int
    pages: int
    per_page: int
    items: int


class ArtistPayload(DiscogsBaseModel):
    name: str
    id: int | None = None
    anv: str | None = None

    _normalize_anv = field_validator("anv", mode="before")(_blank_to_none)


class LabelPayload(DiscogsBaseModel):
    name: str
    catno: str | None = None
    id: int | None = None

    _normalize_catno = field_validator("catno", mode="before")(_blank_to_none)


class FormatPayload(DiscogsBaseModel):
    name: str
    qty: str | None = None
    descriptions: list[str] = Field(default_factory=list[str])


class BasicInformation(DiscogsBaseModel):
    id: int
    title: str
    year: int | None = None
    artists: list[ArtistPayload] = Field(default_factory=list[ArtistPayload])
    labels: list[LabelPayload] = Field(default_factory=list[LabelPayload])
    formats: list[FormatPayload] = Field(default_factory=list[FormatPayload])
    genres: list[str] = Field(default_factory=list[str])
    styles: list[str] = Field(default_factory=list[str])


class CollectionReleasePayload(DiscogsBaseModel):
    id: int
    instance_id: int | None = None
    date_added: datetime | None = None
    basic_information: BasicInformation


class CollectionPage(DiscogsBaseModel):
    pagination: Pagination
    releases: list[CollectionReleasePayload] = Field(
        default_factory=list[CollectionReleasePayload]
    )


class ErrorResponse(DiscogsBaseModel):
    message: str
