"""Cascading Year → Make → Model filter options.

Each query degrades to an empty list when a parameter it needs is missing.
"""

from __future__ import annotations

from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository


class GetAvailableYears:
    """
    Years offered in the first dropdown.

    The result is the contiguous span from the newest year_end down to the
    oldest year_start across active ranges, so a year no range covers can
    still appear when it sits between two ranges.
    """

    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, store_hash: str | None) -> list[int]:
        bounds = self._vehicle_repository.year_bounds(store_hash)
        if bounds is None:
            return []
        min_year, max_year = bounds
        return list(range(max_year, min_year - 1, -1))


class GetAvailableMakes:
    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, store_hash: str | None, year: int | None) -> list[str]:
        if year is None:
            return []
        return self._vehicle_repository.distinct_makes(year, store_hash)


class GetAvailableModels:
    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, store_hash: str | None, year: int | None, make: str | None) -> list[str]:
        if year is None or not make:
            return []
        return self._vehicle_repository.distinct_models(year, make, store_hash)
