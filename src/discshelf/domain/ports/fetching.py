"""Ports for fetching external domain data."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from discshelf.domain.model import ReleaseDraft


@runtime_checkable
class CollectionFetcher(Protocol):
    """Callable port returning a user's remote collection as release drafts."""

    def __call__(
        self,
        *,
        username: str | None = None,
        max_releases: int | None = None,
    ) -> list[ReleaseDraft]: ...


__all__ = ["CollectionFetcher"]
