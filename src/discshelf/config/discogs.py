"""Discogs configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass

from .env import require_env_vars
from .http_client import HttpClientConfig

DISCOGS_BASE_URL = "https://api.discogs.com"
DEFAULT_DISCOGS_USER_AGENT = "discshelf/0.1 (+https://github.com/discshelf/discshelf)"
# Discogs allows 60 authenticated requests per minute.
DISCOGS_CALLS_PER_SECOND = 1.0


@dataclass(frozen=True, slots=True)
class DiscogsConfig:
    token: str
    username: str
    http: HttpClientConfig


def get_discogs_config(*, username: str | None = None) -> DiscogsConfig:
    names = ("DISCOGS_TOKEN",) if username else ("DISCOGS_TOKEN", "DISCOGS_USERNAME")
    values = require_env_vars(names)
    token = values["DISCOGS_TOKEN"]

    http = HttpClientConfig(
        name="discogs",
        base_url=DISCOGS_BASE_URL,
        headers={
            "User-Agent": os.getenv("DISCOGS_USER_AGENT") or DEFAULT_DISCOGS_USER_AGENT,
            "Authorization": f"Discogs token={token}",
        },
        calls_per_second=DISCOGS_CALLS_PER_SECOND,
    )
    return DiscogsConfig(
        token=token,
        username=username or values["DISCOGS_USERNAME"],
        http=http,
    )
