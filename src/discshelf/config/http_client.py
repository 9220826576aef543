"""Settings for the rate-limited, retrying HTTP client used by the API adapters."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(slots=True, frozen=True)
class HttpClientConfig:
    """One upstream API.

    Only idempotent GET requests are retried. ``calls_per_second=None`` turns the
    rate limiter off; cached responses live in memory for the client's lifetime.
    """

    name: str
    base_url: str
    headers: Mapping[str, str] = field(default_factory=dict[str, str])
    timeout_seconds: float = 30.0
    max_retries: int = 4
    calls_per_second: float | None = None
    cache_responses: bool = True
