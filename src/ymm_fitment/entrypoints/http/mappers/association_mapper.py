from __future__ import annotations

from ymm_fitment.entrypoints.http.dtos.associations import (
    AssociateVehiclesResponseDTO,
    AssociationExportDTO,
    AssociationExportRowDTO,
    VehicleProductsDTO,
)
from ymm_fitment.use_cases.manage_associations import (
    AssociateVehiclesResponse,
    AssociationRecord,
    VehicleProducts,
)


class AssociationMapper:
    @staticmethod
    def to_associate_response(result: AssociateVehiclesResponse) -> AssociateVehiclesResponseDTO:
        return AssociateVehiclesResponseDTO(
            message="Vehicle associations updated successfully",
            product_id=result.product_id,
            created=result.created,
            already_linked=result.already_linked,
        )

    @staticmethod
    def to_export_response(records: list[AssociationRecord]) -> AssociationExportDTO:
        return AssociationExportDTO(
            associations=[
                AssociationExportRowDTO(
                    product_id=record.product_id,
                    vehicle_id=record.vehicle.id,
                    make=record.vehicle.make,
                    model=record.vehicle.model,
                    year_start=record.vehicle.year_start,
                    year_end=record.vehicle.year_end,
                    is_active=record.vehicle.is_active,
                )
                for record in records
            ],
            total=len(records),
        )

    @staticmethod
    def to_vehicle_products_response(result: VehicleProducts) -> VehicleProductsDTO:
        return VehicleProductsDTO(
            vehicle_id=result.vehicle.id,
            product_ids=result.product_ids,
            total=len(result.product_ids),
        )
