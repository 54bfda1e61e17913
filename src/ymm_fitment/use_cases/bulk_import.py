"""Bulk import of vehicle ranges and product associations.

Imports are not transactional across the batch: every row is processed on
its own and produces one tagged outcome. A bad row is reported and the
import carries on with the next one.
"""

from __future__ import annotations

import csv
import io
import logging
from typing import Any, Mapping, Sequence

from ymm_fitment.domain.errors import DomainError, ValidationError
from ymm_fitment.domain.imports import ImportReport, ImportRowOutcome, RowFailed, RowImported
from ymm_fitment.domain.vehicle import ProductVehicleLink, VehicleRangeDraft, clean_product_id
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository

logger = logging.getLogger(__name__)

VEHICLE_CSV_COLUMNS = ("year_start", "year_end", "make", "model")
ASSOCIATION_CSV_COLUMNS = ("product_id", "year", "make", "model")


def parse_csv_rows(csv_text: str, columns: Sequence[str]) -> list[dict[str, str]]:
    """
    Turn CSV text into row mappings keyed by ``columns``.

    The first line is a header and is always skipped. Blank lines are
    ignored. Short rows simply lack the trailing keys and fail validation
    later as individual rows.
    """
    reader = csv.reader(io.StringIO(csv_text.strip()))
    next(reader, None)  # header

    rows = []
    for values in reader:
        if not any(value.strip() for value in values):
            continue
        rows.append(dict(zip(columns, values)))
    return rows


def _failed(row_number: int, exc: DomainError) -> RowFailed:
    errors = exc.errors if isinstance(exc, ValidationError) and exc.errors else []
    if errors:
        message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    else:
        message = exc.message
    return RowFailed(row_number=row_number, message=message, errors=list(errors))


def _require_mapping(raw: Any) -> Mapping[str, Any]:
    if not isinstance(raw, Mapping):
        raise ValidationError(
            errors=[{"field": "row", "message": "Must be an object", "code": "INVALID_ROW"}]
        )
    return raw


class ImportVehicleRanges:
    """Creates one vehicle range per row of ``{make, model, year_start, year_end[, is_active]}``."""

    def __init__(self, vehicle_repository: VehicleCatalogRepository) -> None:
        self._vehicle_repository = vehicle_repository

    def execute(
        self, rows: Sequence[Any], store_hash: str | None = None
    ) -> ImportReport:
        outcomes: list[ImportRowOutcome] = []

        for row_number, raw in enumerate(rows, 1):
            try:
                draft = VehicleRangeDraft.from_mapping(
                    _require_mapping(raw), store_hash=store_hash
                )
                vehicle = self._vehicle_repository.add(draft)
            except DomainError as exc:
                logger.warning(
                    "Vehicle import row rejected",
                    extra={"row_number": row_number, "error_message": exc.message},
                )
                outcomes.append(_failed(row_number, exc))
                continue

            outcomes.append(RowImported(row_number=row_number, vehicle_id=vehicle.id))

        report = ImportReport(outcomes=outcomes)
        logger.info(
            "Vehicle import finished",
            extra={"imported": report.imported, "failed": report.failed},
        )
        return report


class ImportProductAssociations:
    """
    Links products to vehicles, one row of ``{product_id, make, model, year}`` at a time.

    The target range is the existing range for make/model that covers the
    year; when there is none a single-year range is created for it.
    Re-importing an existing link succeeds without creating a duplicate.
    """

    def __init__(
        self,
        vehicle_repository: VehicleCatalogRepository,
        product_vehicle_repository: ProductVehicleRepository,
    ) -> None:
        self._vehicle_repository = vehicle_repository
        self._product_vehicle_repository = product_vehicle_repository

    def execute(
        self, rows: Sequence[Any], store_hash: str | None = None
    ) -> ImportReport:
        outcomes: list[ImportRowOutcome] = []

        for row_number, raw in enumerate(rows, 1):
            try:
                outcomes.append(self._import_row(row_number, raw, store_hash))
            except DomainError as exc:
                logger.warning(
                    "Association import row rejected",
                    extra={"row_number": row_number, "error_message": exc.message},
                )
                outcomes.append(_failed(row_number, exc))

        report = ImportReport(outcomes=outcomes)
        logger.info(
            "Association import finished",
            extra={"imported": report.imported, "failed": report.failed},
        )
        return report

    def _import_row(
        self, row_number: int, raw: Any, store_hash: str | None
    ) -> RowImported:
        raw = _require_mapping(raw)
        product_id = clean_product_id(raw.get("product_id"))

        draft = VehicleRangeDraft.from_mapping(
            {"make": raw.get("make"), "model": raw.get("model"), "year": raw.get("year")},
            store_hash=store_hash,
        )

        vehicle = self._vehicle_repository.find_covering(
            draft.year_start, draft.make, draft.model, store_hash
        )
        if vehicle is None:
            vehicle = self._vehicle_repository.add(draft)

        created = self._product_vehicle_repository.add(
            ProductVehicleLink(product_id=product_id, vehicle_id=vehicle.id)
        )
        return RowImported(
            row_number=row_number,
            vehicle_id=vehicle.id,
            product_id=product_id,
            created=created,
        )
