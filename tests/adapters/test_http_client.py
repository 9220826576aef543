from __future__ import annotations

import asyncio

import httpx
from hishel.httpx import AsyncCacheClient

from discshelf.adapters.http_client import ResilientClient, build_limiter, build_retry
from discshelf.config import HttpClientConfig

BASE_URL = "https://example.test"


def test_build_retry_uses_configured_attempts() -> None:
    retry = build_retry(HttpClientConfig(name="test", base_url=BASE_URL, max_retries=2))

    assert retry.total == 2
    assert retry.backoff_factor == 0.5


def test_limiter_follows_calls_per_second() -> None:
    limited = build_limiter(HttpClientConfig(name="test", base_url=BASE_URL, calls_per_second=2.0))

    assert limited is not None
    assert limited.max_rate == 2.0
    assert limited.time_period == 1.0
    assert build_limiter(HttpClientConfig(name="test", base_url=BASE_URL)) is None


def test_response_cache_can_be_switched_off() -> None:
    async def scenario() -> tuple[bool, bool]:
        async with (
            ResilientClient(HttpClientConfig(name="cached", base_url=BASE_URL)) as cached,
            ResilientClient(
                HttpClientConfig(name="plain", base_url=BASE_URL, cache_responses=False)
            ) as plain,
        ):
            return (
                isinstance(cached._client, AsyncCacheClient),  # noqa: SLF001  # type: ignore[reportPrivateUsage]
                isinstance(plain._client, AsyncCacheClient),  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            )

    assert asyncio.run(scenario()) == (True, False)


def test_client_sends_through_limiter() -> None:
    seen: list[str] = []

    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json={"ok": True})

    async def scenario() -> list[int]:
        config = HttpClientConfig(
            name="test", base_url=BASE_URL, calls_per_second=5.0, cache_responses=False
        )
        async with ResilientClient(config) as client:
            client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
            responses = [
                await client.get(f"{BASE_URL}/a"),
                await client.get(f"{BASE_URL}/b", params={"page": 2}),
            ]
        return [response.status_code for response in responses]

    assert asyncio.run(scenario()) == [200, 200]
    assert seen == [f"{BASE_URL}/a", f"{BASE_URL}/b?page=2"]
