"""HTTP client for the Discogs collection API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from pydantic import ValidationError

from discshelf.adapters.http_client import ResilientClient
from discshelf.config.discogs import DiscogsConfig, get_discogs_config
from discshelf.domain.ports.fetching import CollectionFetcher

from .schema import CollectionPage, ErrorResponse
from .translator import parse_collection_release

if TYPE_CHECKING:
    from collections.abc import Callable

    from discshelf.config.http_client import HttpClientConfig
    from discshelf.domain.model import ReleaseDraft

log = getLogger(__name__)

COLLECTION_PATH: Final = "/users/{username}/collection/folders/0/releases"
DEFAULT_PER_PAGE: Final = 100


def _default_client_factory(config: HttpClientConfig) -> ResilientClient:
    return ResilientClient(config)


class DiscogsAPIError(RuntimeError):
    """Raised when the Discogs API rejects a request or returns an unexpected payload."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(slots=True)
class DiscogsCollectionFetcher:
    config: DiscogsConfig = field(default_factory=get_discogs_config)
    client_factory: Callable[[HttpClientConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    per_page: int = DEFAULT_PER_PAGE

    def __call__(
        self,
        *,
        username: str | None = None,
        max_releases: int | None = None,
    ) -> list[ReleaseDraft]:
        return asyncio.run(
            self._fetch_collection_async(
                username=username or self.config.username,
                max_releases=max_releases,
            )
        )

    async def _fetch_collection_async(
        self,
        *,
        username: str,
        max_releases: int | None,
    ) -> list[ReleaseDraft]:
        drafts: list[ReleaseDraft] = []
        page = 1

        async with self.client_factory(self.config.http) as client:
            while True:
                collection = await self._request_page(client=client, username=username, page=page)
                if page == 1:
                    log.info(
                        f"Discogs collection for {username}: {collection.pagination.items} "
                        f"releases on {collection.pagination.pages} pages"
                    )

                for item in collection.releases:
                    drafts.append(parse_collection_release(item))
                    if max_releases is not None and len(drafts) >= max_releases:
                        return drafts

                if page >= collection.pagination.pages:
                    break
                page += 1

        return drafts

    async def _request_page(
        self,
        *,
        client: ResilientClient,
        username: str,
        page: int,
    ) -> CollectionPage:
        url = self.config.http.base_url + COLLECTION_PATH.format(username=quote(username, safe=""))
        response = await client.get(url, params={"page": page, "per_page": self.per_page})

        if response.status_code >= 400:
            message = _error_message(response.json) or response.reason_phrase
            log.error(f"Discogs API error {response.status_code}: {message}")
            raise DiscogsAPIError(message, status_code=response.status_code)

        try:
            return CollectionPage.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise DiscogsAPIError(f"Unexpected Discogs response payload: {exc}") from exc


def _error_message(load_json: Callable[[], object]) -> str | None:
    try:
        payload = load_json()
    except ValueError:
        return None
    try:
        return ErrorResponse.model_validate(payload).message
    except ValidationError:
        return None


if TYPE_CHECKING:
    _fetcher_check: CollectionFetcher = DiscogsCollectionFetcher()
