from __future__ import annotations

from ymm_fitment.domain.store import Store
from ymm_fitment.ports.store_repository import StoreRepository


class InMemoryStoreRepository(StoreRepository):
    """Canonical contract implementation for tests."""

    def __init__(self, stores: list[Store] | None = None) -> None:
        self._stores = {store.store_hash: store for store in stores or []}

    def get_by_hash(self, store_hash: str) -> Store | None:
        return self._stores.get(store_hash)

    def save(self, store: Store) -> Store:
        self._stores[store.store_hash] = store
        return store
