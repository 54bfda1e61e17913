from __future__ import annotations

from abc import ABC, abstractmethod

from ymm_fitment.domain.store import Store


class StoreRepository(ABC):
    """Port for the storefront tenants that scope YMM data."""

    @abstractmethod
    def get_by_hash(self, store_hash: str) -> Store | None: ...

    @abstractmethod
    def save(self, store: Store) -> Store:
        """Insert or update the store identified by ``store.store_hash``."""
        ...
