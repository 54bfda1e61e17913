"""Product ↔ vehicle range association use cases."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ymm_fitment.domain.errors import ValidationError
from ymm_fitment.domain.vehicle import ProductVehicleLink, VehicleRange, clean_product_id
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository
from ymm_fitment.use_cases.manage_vehicle_ranges import GetVehicleRange

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AssociateVehiclesResponse:
    product_id: str
    created: int
    already_linked: int


class AssociateVehicles:
    """
    Links a product to vehicle ranges, idempotently.

    Existing links and repeated ids in the request are ignored rather than
    duplicated. Every id must name an existing range; if any does not,
    nothing is written.
    """

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, product_id: str, vehicle_ids: list[str]) -> AssociateVehiclesResponse:
        """
        Raises:
            ValidationError: If product_id is blank or too long, or any vehicle id is unknown
        """
        product_id = clean_product_id(product_id)

        unique_ids = list(dict.fromkeys(vehicle_ids))
        known = {vehicle.id for vehicle in self._vehicle_repository.get_many(unique_ids)}
        missing = [vid for vid in unique_ids if vid not in known]
        if missing:
            raise ValidationError(
                errors=[
                    {
                        "field": "vehicle_ids",
                        "message": f"Vehicle range not found: {vid}",
                        "code": "UNKNOWN_VEHICLE",
                    }
                    for vid in missing
                ]
            )

        created = 0
        for vehicle_id in unique_ids:
            if self._product_vehicle_repository.add(
                ProductVehicleLink(product_id=product_id, vehicle_id=vehicle_id)
            ):
                created += 1

        logger.info(
            "Vehicles associated with product",
            extra={
                "product_id": product_id,
                "links_created": created,
                "requested": len(unique_ids),
            },
        )
        return AssociateVehiclesResponse(
            product_id=product_id,
            created=created,
            already_linked=len(unique_ids) - created,
        )


class DissociateVehicle:
    """Removes one link. Removing a link that does not exist is a successful no-op."""

    def __init__(self, product_vehicle_repository: ProductVehicleRepository) -> None:
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, product_id: str, vehicle_id: str) -> bool:
        """Returns True if a link was actually removed."""
        return self._product_vehicle_repository.remove(product_id, vehicle_id)


class GetProductVehicles:
    """Reverse lookup: the vehicle ranges a product fits."""

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, product_id: str) -> list[VehicleRange]:
        vehicle_ids = self._product_vehicle_repository.vehicle_ids_for_product(product_id)
        vehicles = {v.id: v for v in self._vehicle_repository.get_many(vehicle_ids)}
        return [vehicles[vid] for vid in vehicle_ids if vid in vehicles]


@dataclass(frozen=True, slots=True)
class VehicleProducts:
    vehicle: VehicleRange
    product_ids: list[str]


class GetVehicleProducts:
    """Forward lookup: the products linked to one vehicle range."""

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._get_vehicle = GetVehicleRange(vehicle_repository)
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, vehicle_id: str) -> VehicleProducts:
        """
        Raises:
            ValidationError: If vehicle_id is not a valid UUID format
            NotFoundError: If the range doesn't exist
        """
        vehicle = self._get_vehicle.execute(vehicle_id)
        product_ids = self._product_vehicle_repository.product_ids_for_vehicles([vehicle.id])
        return VehicleProducts(vehicle=vehicle, product_ids=list(dict.fromkeys(product_ids)))


@dataclass(frozen=True, slots=True)
class AssociationRecord:
    product_id: str
    vehicle: VehicleRange


class ExportAssociations:
    """Every link joined with its vehicle range, in link insertion order."""

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self) -> list[AssociationRecord]:
        links = self._product_vehicle_repository.list_all()
        vehicles = {
            v.id: v
            for v in self._vehicle_repository.get_many([link.vehicle_id for link in links])
        }
        return [
            AssociationRecord(product_id=link.product_id, vehicle=vehicles[link.vehicle_id])
            for link in links
            if link.vehicle_id in vehicles
        ]
