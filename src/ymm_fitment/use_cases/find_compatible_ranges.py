from __future__ import annotations

from dataclasses import dataclass

from ymm_fitment.domain.vehicle import VehicleRange
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository


@dataclass(frozen=True, slots=True)
class VehicleSelection:
    """A complete Year/Make/Model choice, optionally scoped to one store."""

    year: int
    make: str
    model: str
    store_hash: str | None = None


class FindCompatibleRanges:
    """
    Finds the vehicle ranges a YMM selection falls into.

    Matching rule: active, exact make, exact model, year_start <= year <= year_end.
    Overlapping ranges for the same make/model all match.
    """

    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, selection: VehicleSelection) -> list[VehicleRange]:
        return self._vehicle_repository.find_compatible(
            year=selection.year,
            make=selection.make,
            model=selection.model,
            store_hash=selection.store_hash,
        )
