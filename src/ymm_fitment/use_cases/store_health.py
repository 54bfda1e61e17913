from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable

from ymm_fitment.domain.errors import NotFoundError
from ymm_fitment.domain.store import Store
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.store_repository import StoreRepository
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository


@dataclass(frozen=True, slots=True)
class StoreHealth:
    status: str
    store_active: bool
    vehicle_count: int
    compatibility_count: int
    timestamp: datetime


class GetStoreHealth:
    """
    Widget health check for one store.

    vehicle_count counts active ranges in the store's scope;
    compatibility_count counts links that point at those ranges.
    """

    def __init__(
        self,
        store_repository: StoreRepository,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store_repository = store_repository
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def execute(self, store_hash: str) -> StoreHealth:
        """
        Raises:
            NotFoundError: If the store is not registered
        """
        store = self._store_repository.get_by_hash(store_hash)
        if store is None:
            raise NotFoundError(resource="Store", identifier=store_hash)

        active_ids = self._vehicle_repository.active_ids(store_hash)

        return StoreHealth(
            status="healthy",
            store_active=store.is_active,
            vehicle_count=len(active_ids),
            compatibility_count=self._product_vehicle_repository.count_for_vehicles(active_ids),
            timestamp=self._clock(),
        )


class GetWidgetConfig:
    """Looks up the store the widget is embedded in; the display config itself is static."""

    def __init__(self, store_repository: StoreRepository) -> None:
        self._store_repository = store_repository

    def execute(self, store_hash: str) -> Store:
        store = self._store_repository.get_by_hash(store_hash)
        if store is None:
            raise NotFoundError(resource="Store", identifier=store_hash)
        return store
