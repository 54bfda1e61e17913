from fastapi import APIRouter, Depends

from ymm_fitment.entrypoints.http.dependencies import (
    get_associate_vehicles_use_case,
    get_dissociate_vehicle_use_case,
    get_export_associations_use_case,
    get_import_associations_use_case,
    get_product_vehicles_use_case,
)
from ymm_fitment.entrypoints.http.dtos.associations import (
    AssociateVehiclesRequestDTO,
    AssociateVehiclesResponseDTO,
    AssociationExportDTO,
    DissociateVehicleResponseDTO,
)
from ymm_fitment.entrypoints.http.dtos.vehicles import (
    BulkImportRequestDTO,
    ImportReportDTO,
    VehicleResponseDTO,
)
from ymm_fitment.entrypoints.http.error_responses import ErrorResponse
from ymm_fitment.entrypoints.http.mappers.association_mapper import AssociationMapper
from ymm_fitment.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from ymm_fitment.use_cases.bulk_import import ASSOCIATION_CSV_COLUMNS, ImportProductAssociations
from ymm_fitment.use_cases.manage_associations import (
    AssociateVehicles,
    DissociateVehicle,
    ExportAssociations,
    GetProductVehicles,
)


router = APIRouter(tags=["Associations"])


@router.get(
    "/products/{product_id}/vehicles",
    response_model=list[VehicleResponseDTO],
    summary="Vehicles a product fits",
)
def get_product_vehicles(
    product_id: str,
    use_case: GetProductVehicles = Depends(get_product_vehicles_use_case),
) -> list[VehicleResponseDTO]:
    return [VehicleMapper.to_vehicle_response(v) for v in use_case.execute(product_id)]


@router.post(
    "/products/{product_id}/vehicles",
    response_model=AssociateVehiclesResponseDTO,
    summary="Link a product to vehicle ranges",
    description="""
    Adds links between the product and each vehicle range. Links that already
    exist are left alone, so repeating the request is safe.
    """,
    responses={422: {"model": ErrorResponse, "description": "Unknown vehicle range"}},
)
def associate_vehicles(
    product_id: str,
    payload: AssociateVehiclesRequestDTO,
    use_case: AssociateVehicles = Depends(get_associate_vehicles_use_case),
) -> AssociateVehiclesResponseDTO:
    result = use_case.execute(product_id, payload.vehicle_ids)
    return AssociationMapper.to_associate_response(result)


@router.delete(
    "/products/{product_id}/vehicles/{vehicle_id}",
    response_model=DissociateVehicleResponseDTO,
    summary="Unlink a product from a vehicle range",
)
def dissociate_vehicle(
    product_id: str,
    vehicle_id: str,
    use_case: DissociateVehicle = Depends(get_dissociate_vehicle_use_case),
) -> DissociateVehicleResponseDTO:
    removed = use_case.execute(product_id, vehicle_id)
    return DissociateVehicleResponseDTO(
        message="Vehicle association removed" if removed else "Vehicle association not found",
        removed=removed,
    )


@router.post(
    "/product-vehicles/import",
    response_model=ImportReportDTO,
    summary="Bulk import product associations",
    description="""
    Import links from JSON rows or CSV text (`product_id,year,make,model`).

    Each row links the product to the range covering that year, creating a
    single-year range when none exists. Bad rows are reported, not fatal.
    """,
)
def import_associations(
    payload: BulkImportRequestDTO,
    use_case: ImportProductAssociations = Depends(get_import_associations_use_case),
) -> ImportReportDTO:
    rows = VehicleMapper.to_import_rows(payload, ASSOCIATION_CSV_COLUMNS)
    report = use_case.execute(rows, store_hash=payload.store_hash)
    return VehicleMapper.to_import_report(report, noun="associations")


@router.get(
    "/product-vehicles/export",
    response_model=AssociationExportDTO,
    summary="Export every product association",
)
def export_associations(
    use_case: ExportAssociations = Depends(get_export_associations_use_case),
) -> AssociationExportDTO:
    return AssociationMapper.to_export_response(use_case.execute())
