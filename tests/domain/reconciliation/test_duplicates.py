from __future__ import annotations

import pytest

from discshelf.domain.model import LookupKind, Release
from discshelf.domain.reconciliation import DuplicateDetector
from tests.helpers.catalog import FakeCatalogUnitOfWork


@pytest.fixture
def detector() -> DuplicateDetector:
    return DuplicateDetector()


@pytest.fixture
def catalog(fake_uow: FakeCatalogUnitOfWork) -> FakeCatalogUnitOfWork:
    joy, order = fake_uow.lookups(LookupKind.ARTIST).seed("Joy Division", "New Order")
    releases = fake_uow.releases
    releases.add(Release(title="Closer", catalog_number="FACT 25", artist_ids=[joy.id or 0]))
    releases.add(Release(title="Movement", catalog_number="FACT 50", artist_ids=[order.id or 0]))
    releases.add(Release(title="Closer", catalog_number=None, artist_ids=[order.id or 0]))
    return fake_uow


def test_catalog_number_match_is_normalized(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    found = detector.find_duplicates(
        catalog, catalog_number="  fact 25 ", title="Something Else", artist_names=[]
    )

    assert [release.id for release in found] == [1]


def test_title_match_requires_shared_artist(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    found = detector.find_duplicates(
        catalog, catalog_number=None, title="closer", artist_names=["NEW ORDER"]
    )

    assert [release.id for release in found] == [3]


def test_title_match_without_shared_artist_is_not_a_duplicate(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    assert not detector.is_duplicate(
        catalog, catalog_number=None, title="Closer", artist_names=["The Cure"]
    )


def test_results_are_deduplicated_with_catalog_matches_first(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    found = detector.find_duplicates(
        catalog,
        catalog_number="FACT 25",
        title="Closer",
        artist_names=["Joy Division", "New Order"],
    )

    assert [release.id for release in found] == [1, 3]


def test_exclude_id_removes_the_release_being_edited(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    found = detector.find_duplicates(
        catalog, catalog_number="FACT 25", title=None, artist_names=None, exclude_id=1
    )

    assert found == []


def test_no_inputs_return_empty_list(
    detector: DuplicateDetector, catalog: FakeCatalogUnitOfWork
) -> None:
    assert detector.find_duplicates(catalog, catalog_number="", title="", artist_names=None) == []
    assert catalog.commits == 0
