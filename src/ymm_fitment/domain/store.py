from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Store:
    """A storefront tenant. Its store hash is the scope that partitions YMM data."""

    store_hash: str
    access_token: str
    store_name: str | None = None
    is_active: bool = True


def clean_store_hash(store_hash: str) -> str:
    """Drop the ``stores/`` prefix the platform puts on context strings."""
    return store_hash.replace("stores/", "").strip()
