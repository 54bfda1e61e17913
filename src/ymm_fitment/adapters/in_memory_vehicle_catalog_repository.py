from __future__ import annotations

import uuid

from ymm_fitment.domain.vehicle import (
    Paging,
    VehicleListFilters,
    VehicleRange,
    VehicleRangeDraft,
)
from ymm_fitment.ports.vehicle_catalog_repository import (
    VehicleCatalogRepository,
    VehicleListResult,
)


class InMemoryVehicleCatalogRepository(VehicleCatalogRepository):
    """
    Canonical contract implementation for tests.

    - Stores ranges in insertion order
    - Exact (case-sensitive) make/model matching for compatibility queries
    - Applies paging AFTER filtering and ordering
    """

    def __init__(self, vehicles: list[VehicleRange] | None = None) -> None:
        self._vehicles: dict[str, VehicleRange] = {v.id: v for v in vehicles or []}

    def add(self, draft: VehicleRangeDraft) -> VehicleRange:
        vehicle = draft.to_range(str(uuid.uuid4()))
        self._vehicles[vehicle.id] = vehicle
        return vehicle

    def get_by_id(self, vehicle_id: str) -> VehicleRange | None:
        return self._vehicles.get(vehicle_id)

    def get_many(self, vehicle_ids: list[str]) -> list[VehicleRange]:
        return [self._vehicles[vid] for vid in dict.fromkeys(vehicle_ids) if vid in self._vehicles]

    def update(self, vehicle_id: str, draft: VehicleRangeDraft) -> VehicleRange | None:
        existing = self._vehicles.get(vehicle_id)
        if existing is None:
            return None
        updated = VehicleRange(
            id=vehicle_id,
            make=draft.make,
            model=draft.model,
            year_start=draft.year_start,
            year_end=draft.year_end,
            is_active=draft.is_active,
            store_hash=draft.store_hash or existing.store_hash,
        )
        self._vehicles[vehicle_id] = updated
        return updated

    def delete(self, vehicle_id: str) -> bool:
        return self._vehicles.pop(vehicle_id, None) is not None

    def list(self, filters: VehicleListFilters, paging: Paging) -> VehicleListResult:
        matches = [
            v
            for v in self._scoped(filters.store_hash, active_only=False)
            if self._matches_search(v, filters.search)
        ]
        matches.sort(key=lambda v: (v.make, v.model, v.year_start))
        total_count = len(matches)  # Count BEFORE paging

        start = paging.offset
        end = paging.offset + paging.limit
        return VehicleListResult(vehicles=matches[start:end], total_count=total_count)

    def find_compatible(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> list[VehicleRange]:
        return [v for v in self._scoped(store_hash) if v.matches(year, make, model)]

    def find_covering(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> VehicleRange | None:
        candidates = [
            v
            for v in self._scoped(store_hash, active_only=False)
            if v.make == make and v.model == model and v.covers_year(year)
        ]
        return min(candidates, key=lambda v: v.year_start, default=None)

    def year_bounds(self, store_hash: str | None = None) -> tuple[int, int] | None:
        active = self._scoped(store_hash)
        if not active:
            return None
        return min(v.year_start for v in active), max(v.year_end for v in active)

    def distinct_makes(self, year: int, store_hash: str | None = None) -> list[str]:
        return sorted({v.make for v in self._scoped(store_hash) if v.covers_year(year)})

    def distinct_models(
        self, year: int, make: str, store_hash: str | None = None
    ) -> list[str]:
        return sorted(
            {v.model for v in self._scoped(store_hash) if v.make == make and v.covers_year(year)}
        )

    def active_ids(self, store_hash: str | None = None) -> list[str]:
        return [v.id for v in self._scoped(store_hash)]

    def _scoped(self, store_hash: str | None, active_only: bool = True) -> list[VehicleRange]:
        return [
            v
            for v in self._vehicles.values()
            if (store_hash is None or v.store_hash == store_hash)
            and (v.is_active or not active_only)
        ]

    @staticmethod
    def _matches_search(vehicle: VehicleRange, search: str | None) -> bool:
        if not search:
            return True
        needle = search.lower()
        return needle in vehicle.make.lower() or needle in vehicle.model.lower()
