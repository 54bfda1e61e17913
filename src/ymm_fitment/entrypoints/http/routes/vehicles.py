from fastapi import APIRouter, Depends, status

from ymm_fitment.entrypoints.http.dependencies import (
    get_create_vehicle_use_case,
    get_delete_vehicle_use_case,
    get_get_vehicle_use_case,
    get_import_vehicles_use_case,
    get_list_vehicles_use_case,
    get_update_vehicle_use_case,
    get_vehicle_products_use_case,
)
from ymm_fitment.entrypoints.http.dtos.associations import VehicleProductsDTO
from ymm_fitment.entrypoints.http.dtos.vehicles import (
    BulkImportRequestDTO,
    ImportReportDTO,
    VehicleDeletedDTO,
    VehicleListQueryDTO,
    VehicleListResponseDTO,
    VehicleRequestDTO,
    VehicleResponseDTO,
)
from ymm_fitment.entrypoints.http.error_responses import ErrorResponse
from ymm_fitment.entrypoints.http.mappers.association_mapper import AssociationMapper
from ymm_fitment.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from ymm_fitment.use_cases.bulk_import import VEHICLE_CSV_COLUMNS, ImportVehicleRanges
from ymm_fitment.use_cases.manage_associations import GetVehicleProducts
from ymm_fitment.use_cases.manage_vehicle_ranges import (
    CreateVehicleRange,
    DeleteVehicleRange,
    GetVehicleRange,
    ListVehicleRanges,
    UpdateVehicleRange,
)


router = APIRouter(prefix="/vehicles", tags=["Vehicles"])


@router.get(
    "",
    response_model=VehicleListResponseDTO,
    summary="List vehicle ranges",
    description="""
    Page through vehicle ranges ordered by make, model and first year.

    ## Filters
    - `store_hash`: only ranges owned by that store
    - `search`: case-insensitive substring of make or model

    ## Pagination
    - Default limit: 20
    - Max limit: 200
    """,
)
def list_vehicles(
    query: VehicleListQueryDTO = Depends(),
    use_case: ListVehicleRanges = Depends(get_list_vehicles_use_case),
) -> VehicleListResponseDTO:
    request = VehicleMapper.to_list_request(query)
    result = use_case.execute(request)
    return VehicleMapper.to_list_response(result, offset=query.offset, limit=query.limit)


@router.post(
    "",
    response_model=VehicleResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create a vehicle range",
    responses={422: {"model": ErrorResponse, "description": "Invalid range"}},
)
def create_vehicle(
    payload: VehicleRequestDTO,
    use_case: CreateVehicleRange = Depends(get_create_vehicle_use_case),
) -> VehicleResponseDTO:
    vehicle = use_case.execute(VehicleMapper.to_draft(payload))
    return VehicleMapper.to_vehicle_response(vehicle)


@router.post(
    "/bulk-import",
    response_model=ImportReportDTO,
    summary="Bulk import vehicle ranges",
    description="""
    Import ranges from JSON rows or CSV text (`year_start,year_end,make,model`).

    Rows are processed one by one: a bad row is reported in `errors` and the
    remaining rows are still imported.
    """,
)
def bulk_import_vehicles(
    payload: BulkImportRequestDTO,
    use_case: ImportVehicleRanges = Depends(get_import_vehicles_use_case),
) -> ImportReportDTO:
    rows = VehicleMapper.to_import_rows(payload, VEHICLE_CSV_COLUMNS)
    report = use_case.execute(rows, store_hash=payload.store_hash)
    return VehicleMapper.to_import_report(report, noun="vehicles")


@router.get(
    "/{vehicle_id}",
    response_model=VehicleResponseDTO,
    summary="Get a vehicle range",
    responses={404: {"model": ErrorResponse, "description": "Vehicle range not found"}},
)
def get_vehicle(
    vehicle_id: str,
    use_case: GetVehicleRange = Depends(get_get_vehicle_use_case),
) -> VehicleResponseDTO:
    return VehicleMapper.to_vehicle_response(use_case.execute(vehicle_id))


@router.get(
    "/{vehicle_id}/products",
    response_model=VehicleProductsDTO,
    summary="Products linked to a vehicle range",
    responses={404: {"model": ErrorResponse, "description": "Vehicle range not found"}},
)
def get_vehicle_products(
    vehicle_id: str,
    use_case: GetVehicleProducts = Depends(get_vehicle_products_use_case),
) -> VehicleProductsDTO:
    return AssociationMapper.to_vehicle_products_response(use_case.execute(vehicle_id))


@router.put(
    "/{vehicle_id}",
    response_model=VehicleResponseDTO,
    summary="Replace a vehicle range",
    responses={
        404: {"model": ErrorResponse, "description": "Vehicle range not found"},
        422: {"model": ErrorResponse, "description": "Invalid range"},
    },
)
def update_vehicle(
    vehicle_id: str,
    payload: VehicleRequestDTO,
    use_case: UpdateVehicleRange = Depends(get_update_vehicle_use_case),
) -> VehicleResponseDTO:
    vehicle = use_case.execute(vehicle_id, VehicleMapper.to_draft(payload))
    return VehicleMapper.to_vehicle_response(vehicle)


@router.delete(
    "/{vehicle_id}",
    response_model=VehicleDeletedDTO,
    summary="Delete a vehicle range",
    description="Deletes the range together with every product link that points at it.",
    responses={404: {"model": ErrorResponse, "description": "Vehicle range not found"}},
)
def delete_vehicle(
    vehicle_id: str,
    use_case: DeleteVehicleRange = Depends(get_delete_vehicle_use_case),
) -> VehicleDeletedDTO:
    removed_links = use_case.execute(vehicle_id)
    return VehicleDeletedDTO(
        message="Vehicle deleted successfully",
        removed_links=removed_links,
    )
