from __future__ import annotations

from dataclasses import dataclass

from ymm_fitment.domain.vehicle import VehicleRange
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository
from ymm_fitment.use_cases.find_compatible_ranges import FindCompatibleRanges, VehicleSelection


@dataclass(frozen=True, slots=True)
class ResolveCompatibleProductsResponse:
    product_ids: list[str]  # distinct, first-seen order (not a sort guarantee)
    vehicles: list[VehicleRange]


class ResolveCompatibleProducts:
    """
    Resolves a YMM selection to the distinct external product ids that fit it.

    Read-only. A product linked through several matching (overlapping)
    ranges is returned exactly once.
    """

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._find_ranges = FindCompatibleRanges(vehicle_repository)
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, selection: VehicleSelection) -> ResolveCompatibleProductsResponse:
        vehicles = self._find_ranges.execute(selection)
        if not vehicles:
            return ResolveCompatibleProductsResponse(product_ids=[], vehicles=[])

        product_ids = self._product_vehicle_repository.product_ids_for_vehicles(
            [vehicle.id for vehicle in vehicles]
        )

        return ResolveCompatibleProductsResponse(
            product_ids=list(dict.fromkeys(product_ids)),
            vehicles=vehicles,
        )
