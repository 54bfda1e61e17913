from __future__ import annotations

from typing import Any, Sequence

from ymm_fitment.domain.errors import ValidationError
from ymm_fitment.domain.imports import ImportReport, RowImported
from ymm_fitment.domain.vehicle import (
    Paging,
    VehicleListFilters,
    VehicleRange,
    VehicleRangeDraft,
)
from ymm_fitment.entrypoints.http.dtos.vehicles import (
    BulkImportRequestDTO,
    ImportReportDTO,
    ImportRowResultDTO,
    VehicleListQueryDTO,
    VehicleListResponseDTO,
    VehicleRequestDTO,
    VehicleResponseDTO,
)
from ymm_fitment.ports.vehicle_catalog_repository import VehicleListResult
from ymm_fitment.use_cases.bulk_import import parse_csv_rows
from ymm_fitment.use_cases.manage_vehicle_ranges import ListVehicleRangesRequest


class VehicleMapper:
    """Maps between REST DTOs and domain models for vehicle administration."""

    @staticmethod
    def to_draft(dto: VehicleRequestDTO) -> VehicleRangeDraft:
        return VehicleRangeDraft(
            make=dto.make.strip(),
            model=dto.model.strip(),
            year_start=dto.year_start,
            year_end=dto.year_end,
            is_active=dto.is_active,
            store_hash=dto.store_hash,
        )

    @staticmethod
    def to_vehicle_response(vehicle: VehicleRange) -> VehicleResponseDTO:
        return VehicleResponseDTO(
            id=vehicle.id,
            make=vehicle.make,
            model=vehicle.model,
            year_start=vehicle.year_start,
            year_end=vehicle.year_end,
            is_active=vehicle.is_active,
            store_hash=vehicle.store_hash,
        )

    @staticmethod
    def to_list_request(dto: VehicleListQueryDTO) -> ListVehicleRangesRequest:
        return ListVehicleRangesRequest(
            filters=VehicleListFilters(store_hash=dto.store_hash, search=dto.search or None),
            paging=Paging(offset=dto.offset, limit=dto.limit),
        )

    @staticmethod
    def to_list_response(
        result: VehicleListResult, offset: int, limit: int
    ) -> VehicleListResponseDTO:
        return VehicleListResponseDTO(
            vehicles=[VehicleMapper.to_vehicle_response(v) for v in result.vehicles],
            total=result.total_count or 0,  # Handle None from repository
            offset=offset,
            limit=limit,
        )

    @staticmethod
    def to_import_rows(
        dto: BulkImportRequestDTO, csv_columns: Sequence[str]
    ) -> list[Any]:
        """
        Raw rows from either JSON objects or CSV text.

        Raises:
            ValidationError: If the payload carries neither rows nor csv_data
        """
        if dto.rows is not None:
            return dto.rows
        if dto.csv_data:
            return list(parse_csv_rows(dto.csv_data, csv_columns))
        raise ValidationError(
            errors=[
                {
                    "field": "rows",
                    "message": "Provide either rows or csv_data",
                    "code": "REQUIRED",
                }
            ]
        )

    @staticmethod
    def to_import_report(report: ImportReport, noun: str) -> ImportReportDTO:
        results = []
        for outcome in report.outcomes:
            if isinstance(outcome, RowImported):
                results.append(
                    ImportRowResultDTO(
                        row=outcome.row_number,
                        status="imported",
                        vehicle_id=outcome.vehicle_id,
                        product_id=outcome.product_id,
                        created=outcome.created,
                    )
                )
            else:
                results.append(
                    ImportRowResultDTO(
                        row=outcome.row_number,
                        status="failed",
                        message=outcome.message,
                    )
                )

        return ImportReportDTO(
            message=(
                f"Import completed. {report.imported} {noun} imported, "
                f"{report.failed} failed."
            ),
            imported=report.imported,
            failed=report.failed,
            results=results,
            errors=[f"Row {f.row_number}: {f.message}" for f in report.failures],
        )
