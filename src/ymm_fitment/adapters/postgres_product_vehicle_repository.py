"""PostgreSQL implementation of ProductVehicleRepository."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from ymm_fitment.domain.errors import ConflictError
from ymm_fitment.domain.vehicle import ProductVehicleLink
from ymm_fitment.infra.db.models.product_vehicle import ProductVehicleRow
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository


class PostgresProductVehicleRepository(ProductVehicleRepository):
    """
    PostgreSQL implementation of ProductVehicleRepository.

    Duplicate suppression relies on the (bigcommerce_product_id, vehicle_id)
    unique constraint: inserts use ON CONFLICT DO NOTHING, so concurrent
    requests linking the same pair cannot produce two rows.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, link: ProductVehicleLink) -> bool:
        statement = (
            insert(ProductVehicleRow)
            .values(
                bigcommerce_product_id=link.product_id,
                vehicle_id=UUID(link.vehicle_id),
            )
            .on_conflict_do_nothing(
                index_elements=[
                    ProductVehicleRow.bigcommerce_product_id,
                    ProductVehicleRow.vehicle_id,
                ]
            )
        )
        # Savepoint: a rejected insert must not poison the request transaction
        try:
            with self._session.begin_nested():
                result = self._session.execute(statement)
        except DBAPIError as exc:
            raise ConflictError(
                "Product association could not be stored",
                product_id=link.product_id,
                vehicle_id=link.vehicle_id,
                reason=str(exc.orig),
            ) from exc
        return bool(result.rowcount)

    def remove(self, product_id: str, vehicle_id: str) -> bool:
        try:
            vehicle_uuid = UUID(vehicle_id)
        except ValueError:  # Invalid UUID format - nothing can match
            return False

        statement = delete(ProductVehicleRow).where(
            ProductVehicleRow.bigcommerce_product_id == product_id,
            ProductVehicleRow.vehicle_id == vehicle_uuid,
        )
        result = self._session.execute(statement)
        return bool(result.rowcount)

    def remove_for_vehicle(self, vehicle_id: str) -> int:
        statement = delete(ProductVehicleRow).where(
            ProductVehicleRow.vehicle_id == UUID(vehicle_id)
        )
        return self._session.execute(statement).rowcount or 0

    def product_ids_for_vehicles(self, vehicle_ids: list[str]) -> list[str]:
        if not vehicle_ids:
            return []
        query = (
            select(ProductVehicleRow.bigcommerce_product_id)
            .where(ProductVehicleRow.vehicle_id.in_([UUID(vid) for vid in vehicle_ids]))
            .distinct()
        )
        return list(self._session.execute(query).scalars().all())

    def vehicle_ids_for_product(self, product_id: str) -> list[str]:
        query = (
            select(ProductVehicleRow.vehicle_id)
            .where(ProductVehicleRow.bigcommerce_product_id == product_id)
            .order_by(ProductVehicleRow.id)
        )
        return [str(vid) for vid in self._session.execute(query).scalars().all()]

    def count_for_vehicles(self, vehicle_ids: list[str]) -> int:
        if not vehicle_ids:
            return 0
        query = select(func.count()).where(
            ProductVehicleRow.vehicle_id.in_([UUID(vid) for vid in vehicle_ids])
        )
        return self._session.execute(query).scalar() or 0

    def list_all(self) -> list[ProductVehicleLink]:
        query = select(ProductVehicleRow).order_by(ProductVehicleRow.id)
        rows = self._session.execute(query).scalars().all()
        return [
            ProductVehicleLink(
                product_id=row.bigcommerce_product_id,
                vehicle_id=str(row.vehicle_id),
            )
            for row in rows
        ]
