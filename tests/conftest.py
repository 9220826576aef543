from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002

from discshelf.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    shutdown,
    startup,
)
from tests.helpers.catalog import FakeCatalogUnitOfWork

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from pathlib import Path


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_unit_of_work(
    sqlite_engine: Engine,
) -> Iterator[Callable[[], SqlAlchemyCatalogUnitOfWork]]:
    startup(engine=sqlite_engine, force=True)

    def factory() -> SqlAlchemyCatalogUnitOfWork:
        return SqlAlchemyCatalogUnitOfWork()

    try:
        yield factory
    finally:
        shutdown()


@pytest.fixture
def fake_uow() -> FakeCatalogUnitOfWork:
    return FakeCatalogUnitOfWork()


@pytest.fixture
def release_payloads() -> list[dict[str, object]]:
    return [
        {
            "Id": 1,
            "Title": "Unknown Pleasures",
            "ReleaseYear": "1979-06-15T00:00:00",
            "OrigReleaseYear": "1979",
            "Artists": [1],
            "Genres": [1],
            "Live": False,
            "LabelId": 1,
            "CountryId": 1,
            "LabelNumber": "FACT 10",
            "LengthInSeconds": "2340",
            "FormatId": 1,
            "PackagingId": 0,
            "Upc": "5016025610105",
            "Links": [
                {"Description": "Discogs", "Url": "https://example.org/1", "UrlType": "Discogs"}
            ],
            "DateAdded": "2020-01-01T10:00:00",
            "LastModified": "2021-02-03T04:05:06",
            "Media": [{"Title": "LP", "FormatId": 1, "Index": 1, "Tracks": []}],
        },
        {
            "id": 2,
            "title": "Closer",
            "artistIds": [1],
            "artistNames": ["Joy Division"],
            "labelName": "Factory",
            "countryId": 1,
            "formatId": 1,
            "upc": "",
        },
    ]


@pytest.fixture
def dataset_dir(tmp_path: Path, release_payloads: list[dict[str, object]]) -> Path:
    directory = tmp_path / "dataset"
    directory.mkdir()
    (directory / "musicreleases.json").write_text(json.dumps(release_payloads), encoding="utf-8")
    (directory / "countrys.json").write_text(
        json.dumps({"Countrys": [{"Id": 1, "Name": "UK"}, {"Id": 2, "Name": "US"}]}),
        encoding="utf-8",
    )
    (directory / "formats.json").write_text(
        json.dumps({"Formats": [{"Id": 1, "Name": "Vinyl"}]}), encoding="utf-8"
    )
    (directory / "labels.json").write_text(
        json.dumps({"Labels": [{"Id": 1, "Name": "Factory"}]}), encoding="utf-8"
    )
    (directory / "artists.json").write_text(
        json.dumps({"Artists": [{"Id": 1, "Name": "Joy Division"}]}), encoding="utf-8"
    )
    (directory / "genres.json").write_text(
        json.dumps({"Genres": [{"Id": 1, "Name": "Post-Punk"}]}), encoding="utf-8"
    )
    (directory / "packagings.json").write_text(
        json.dumps({"Packagings": [{"Id": 1, "Name": "Gatefold"}]}), encoding="utf-8"
    )
    return directory
