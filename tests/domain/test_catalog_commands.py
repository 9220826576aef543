from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from discshelf.domain.catalog_commands import create_release, update_release
from discshelf.domain.model import ById, ByName, LookupKind, Release, ReleaseDraft
from tests.helpers.catalog import FakeCatalogUnitOfWork

NOW = datetime(2024, 5, 1, 12, tzinfo=UTC)


def test_create_release_resolves_references_and_commits(
    fake_uow: FakeCatalogUnitOfWork,
) -> None:
    (vinyl,) = fake_uow.lookups(LookupKind.FORMAT).seed("Vinyl")
    draft = ReleaseDraft(
        title="Unknown Pleasures",
        label=ByName(name="Factory"),
        format=ById(id=vinyl.id or 0),
        artist_names=("Joy Division",),
        catalog_number="FACT 10",
    )

    result = create_release(fake_uow, draft, now=NOW)

    assert result.saved
    release = result.release
    assert release is not None
    assert release.id is not None
    assert release.format_id == vinyl.id
    assert release.date_added == NOW
    assert release.last_modified == NOW
    assert result.created.counts() == {LookupKind.ARTIST: 1, LookupKind.LABEL: 1}
    assert fake_uow.commits == 1


def test_create_release_refuses_duplicates(fake_uow: FakeCatalogUnitOfWork) -> None:
    existing = Release(title="Closer", catalog_number="FACT 25")
    fake_uow.releases.add(existing)

    result = create_release(
        fake_uow, ReleaseDraft(title="Something Else", catalog_number="fact 25")
    )

    assert not result.saved
    assert result.duplicates == [existing]
    assert fake_uow.commits == 0
    assert fake_uow.releases.count() == 1


def test_create_release_checks_artist_names_from_ids(fake_uow: FakeCatalogUnitOfWork) -> None:
    (joy_division,) = fake_uow.lookups(LookupKind.ARTIST).seed("Joy Division")
    existing = Release(title="Closer", artist_ids=[joy_division.id or 0])
    fake_uow.releases.add(existing)

    result = create_release(
        fake_uow, ReleaseDraft(title="closer", artist_ids=(joy_division.id or 0,))
    )

    assert result.duplicates == [existing]


def test_create_release_assigns_owner_to_new_lookups(fake_uow: FakeCatalogUnitOfWork) -> None:
    owner_id = uuid4()

    result = create_release(
        fake_uow, ReleaseDraft(title="Low", genre_names=("Art Rock",)), owner_id=owner_id
    )

    assert result.release is not None
    assert result.release.owner_id == owner_id
    assert [genre.owner_id for genre in result.created.genres] == [owner_id]


def test_update_release_missing_reports_not_found(fake_uow: FakeCatalogUnitOfWork) -> None:
    result = update_release(fake_uow, 42, ReleaseDraft(title="Anything"))

    assert result.not_found
    assert not result.saved
    assert fake_uow.commits == 0


def test_update_release_overwrites_fields(fake_uow: FakeCatalogUnitOfWork) -> None:
    existing = Release(title="Closr", catalog_number="FACT 25", external_id=7, date_added=NOW)
    fake_uow.releases.add(existing)
    later = datetime(2024, 6, 1, tzinfo=UTC)

    result = update_release(
        fake_uow,
        existing.id or 0,
        ReleaseDraft(title="Closer", catalog_number="FACT 25", upc="4006"),
        now=later,
    )

    assert result.release is existing
    assert existing.title == "Closer"
    assert existing.upc == "4006"
    assert existing.external_id == 7
    assert existing.date_added == NOW
    assert existing.last_modified == later
    assert fake_uow.commits == 1


def test_update_release_refuses_duplicate_of_other_release(
    fake_uow: FakeCatalogUnitOfWork,
) -> None:
    first = Release(title="Closer", catalog_number="FACT 25")
    second = Release(title="Still", catalog_number="FACT 40")
    fake_uow.releases.add(first)
    fake_uow.releases.add(second)

    result = update_release(
        fake_uow, second.id or 0, ReleaseDraft(title="Still", catalog_number="FACT 25")
    )

    assert result.duplicates == [first]
    assert second.catalog_number == "FACT 40"
