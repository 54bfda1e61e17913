"""Admin use cases for vehicle ranges: create, read, update, delete, list."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from ymm_fitment.domain.errors import NotFoundError, ValidationError
from ymm_fitment.domain.vehicle import (
    Paging,
    VehicleListFilters,
    VehicleRange,
    VehicleRangeDraft,
)
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.vehicle_catalog_repository import (
    VehicleCatalogRepository,
    VehicleListResult,
)

logger = logging.getLogger(__name__)


def _validate_vehicle_id(vehicle_id: str) -> None:
    try:
        UUID(vehicle_id)
    except ValueError:
        raise ValidationError(
            errors=[
                {
                    "field": "vehicle_id",
                    "message": "Must be a valid UUID format",
                    "code": "INVALID_UUID",
                }
            ]
        )


class CreateVehicleRange:
    """Creates a range. Overlap with existing ranges of the same make/model is allowed."""

    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, draft: VehicleRangeDraft) -> VehicleRange:
        draft.validate()
        vehicle = self._vehicle_repository.add(draft)
        logger.info(
            "Vehicle range created",
            extra={"vehicle_id": vehicle.id, "make": vehicle.make, "model": vehicle.model},
        )
        return vehicle


class GetVehicleRange:
    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, vehicle_id: str) -> VehicleRange:
        """
        Raises:
            ValidationError: If vehicle_id is not a valid UUID format
            NotFoundError: If the range doesn't exist
        """
        _validate_vehicle_id(vehicle_id)

        vehicle = self._vehicle_repository.get_by_id(vehicle_id)
        if vehicle is None:
            raise NotFoundError(resource="VehicleRange", identifier=vehicle_id)
        return vehicle


class UpdateVehicleRange:
    """Replaces bounds, make, model and the active flag of an existing range."""

    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, vehicle_id: str, draft: VehicleRangeDraft) -> VehicleRange:
        _validate_vehicle_id(vehicle_id)
        draft.validate()

        vehicle = self._vehicle_repository.update(vehicle_id, draft)
        if vehicle is None:
            raise NotFoundError(resource="VehicleRange", identifier=vehicle_id)
        return vehicle


class DeleteVehicleRange:
    """
    Deletes a range and every product link that points at it.

    Links are purged explicitly before the range goes, so the cascade does
    not depend on the store enforcing ON DELETE CASCADE.
    """

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository

    def execute(self, vehicle_id: str) -> int:
        """
        Returns:
            Number of product links removed along with the range

        Raises:
            ValidationError: If vehicle_id is not a valid UUID format
            NotFoundError: If the range doesn't exist
        """
        _validate_vehicle_id(vehicle_id)

        if self._vehicle_repository.get_by_id(vehicle_id) is None:
            raise NotFoundError(resource="VehicleRange", identifier=vehicle_id)

        removed_links = self._product_vehicle_repository.remove_for_vehicle(vehicle_id)
        self._vehicle_repository.delete(vehicle_id)

        logger.info(
            "Vehicle range deleted",
            extra={"vehicle_id": vehicle_id, "removed_links": removed_links},
        )
        return removed_links


@dataclass(frozen=True, slots=True)
class ListVehicleRangesRequest:
    filters: VehicleListFilters
    paging: Paging


class ListVehicleRanges:
    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(self, request: ListVehicleRangesRequest) -> VehicleListResult:
        """
        Raises:
            PagingValidationError: If paging parameters are invalid
        """
        request.paging.validate()
        return self._vehicle_repository.list(filters=request.filters, paging=request.paging)
