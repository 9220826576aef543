"""Public interface for the Discogs adapter."""

from __future__ import annotations

from .client import DiscogsAPIError, DiscogsCollectionFetcher
from .schema import CollectionPage, CollectionReleasePayload
from .translator import parse_collection_release

__all__ = [
    "CollectionPage",
    "CollectionReleasePayload",
    "DiscogsAPIError",
    "DiscogsCollectionFetcher",
    "parse_collection_release",
]
