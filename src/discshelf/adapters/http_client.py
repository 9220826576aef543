"""Async HTTP client with retries, a request rate limit and an in-memory response cache."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Final, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._client import UseClientDefault
    from httpx._types import QueryParamTypes, TimeoutTypes, URLTypes

    from discshelf.config.http_client import HttpClientConfig

log = getLogger(__name__)

RETRY_BACKOFF_FACTOR: Final = 0.5
RETRY_STATUSES: Final = (429, 500, 502, 503, 504)
RETRY_EXCEPTIONS: Final = (httpx.TimeoutException, httpx.NetworkError, httpx.RemoteProtocolError)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    timeout: TimeoutTypes | UseClientDefault


def build_retry(config: HttpClientConfig) -> Retry:
    return Retry(
        total=config.max_retries,
        backoff_factor=RETRY_BACKOFF_FACTOR,
        respect_retry_after_header=True,
        allowed_methods=("GET",),
        status_forcelist=RETRY_STATUSES,
        retry_on_exceptions=RETRY_EXCEPTIONS,
    )


def build_limiter(config: HttpClientConfig) -> AsyncLimiter | None:
    if config.calls_per_second is None:
        return None
    return AsyncLimiter(config.calls_per_second, time_period=1.0)


class ResilientClient:
    """GET-only client; every request waits for the limiter before it is sent."""

    def __init__(self, config: HttpClientConfig) -> None:
        self.config = config
        self._limiter = build_limiter(config)
        transport = RetryTransport(retry=build_retry(config))
        headers = dict(config.headers)

        if config.cache_responses:
            self._client = AsyncCacheClient(
                base_url=config.base_url,
                headers=headers,
                timeout=config.timeout_seconds,
                transport=transport,
                storage=AsyncSqliteStorage(database_path=":memory:"),
            )
        else:
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                headers=headers,
                timeout=config.timeout_seconds,
                transport=transport,
            )
        log.debug(
            f"HTTP client {config.name}: retries={config.max_retries}, "
            f"calls/s={config.calls_per_second}, cache={config.cache_responses}"
        )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(url, **kwargs)
        async with self._limiter:
            return await self._client.get(url, **kwargs)
