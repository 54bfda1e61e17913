"""PostgreSQL implementation of VehicleCatalogRepository."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import func, or_, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from ymm_fitment.domain.errors import ConflictError
from ymm_fitment.domain.vehicle import (
    Paging,
    VehicleListFilters,
    VehicleRange,
    VehicleRangeDraft,
)
from ymm_fitment.infra.db.models.vehicle import VehicleRow
from ymm_fitment.ports.vehicle_catalog_repository import (
    VehicleCatalogRepository,
    VehicleListResult,
)

if TYPE_CHECKING:
    from sqlalchemy.sql import Select


class PostgresVehicleCatalogRepository(VehicleCatalogRepository):
    """
    PostgreSQL implementation of VehicleCatalogRepository.

    - Uses SQLAlchemy ORM for database access
    - Range containment is two WHERE clauses: year_start <= year <= year_end
    - Each insert runs inside a SAVEPOINT so a failing row leaves the
      surrounding transaction usable (bulk import keeps going)
    - Converts VehicleRow (infrastructure) to VehicleRange (domain)
    """

    def __init__(self, session: Session) -> None:
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self._session = session

    def add(self, draft: VehicleRangeDraft) -> VehicleRange:
        row = VehicleRow(
            store_hash=draft.store_hash,
            year_start=draft.year_start,
            year_end=draft.year_end,
            make=draft.make,
            model=draft.model,
            is_active=draft.is_active,
        )
        try:
            with self._session.begin_nested():
                self._session.add(row)
                self._session.flush()
        except DBAPIError as exc:
            raise ConflictError(
                "Vehicle range could not be stored",
                make=draft.make,
                model=draft.model,
                reason=str(exc.orig),
            ) from exc
        return self._to_domain(row)

    def get_by_id(self, vehicle_id: str) -> VehicleRange | None:
        row = self._get_row(vehicle_id)
        return self._to_domain(row) if row else None

    def get_many(self, vehicle_ids: list[str]) -> list[VehicleRange]:
        uuids = _parse_uuids(vehicle_ids)
        if not uuids:
            return []
        query = select(VehicleRow).where(VehicleRow.id.in_(uuids))
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def update(self, vehicle_id: str, draft: VehicleRangeDraft) -> VehicleRange | None:
        row = self._get_row(vehicle_id)
        if row is None:
            return None

        row.make = draft.make
        row.model = draft.model
        row.year_start = draft.year_start
        row.year_end = draft.year_end
        row.is_active = draft.is_active
        if draft.store_hash:
            row.store_hash = draft.store_hash

        self._session.flush()
        return self._to_domain(row)

    def delete(self, vehicle_id: str) -> bool:
        row = self._get_row(vehicle_id)
        if row is None:
            return False
        # product_vehicles rows go with it (ON DELETE CASCADE)
        self._session.delete(row)
        self._session.flush()
        return True

    def list(self, filters: VehicleListFilters, paging: Paging) -> VehicleListResult:
        """
        List ranges with optional scope and free-text search.

        Executes two queries:
        1. COUNT(*) to get total matching ranges (before paging)
        2. SELECT with ORDER BY/OFFSET/LIMIT to get the page
        """
        query = select(VehicleRow)
        if filters.store_hash:
            query = query.where(VehicleRow.store_hash == filters.store_hash)
        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(VehicleRow.make.ilike(pattern), VehicleRow.model.ilike(pattern))
            )

        count_query = select(func.count()).select_from(query.subquery())
        total_count = self._session.execute(count_query).scalar() or 0

        query = (
            query.order_by(VehicleRow.make, VehicleRow.model, VehicleRow.year_start)
            .offset(paging.offset)
            .limit(paging.limit)
        )
        rows = self._session.execute(query).scalars().all()

        return VehicleListResult(
            vehicles=[self._to_domain(row) for row in rows],
            total_count=total_count,
        )

    def find_compatible(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> list[VehicleRange]:
        query = self._covering_query(year, store_hash).where(
            VehicleRow.make == make,
            VehicleRow.model == model,
        )
        rows = self._session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def find_covering(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> VehicleRange | None:
        query = (
            select(VehicleRow)
            .where(
                VehicleRow.make == make,
                VehicleRow.model == model,
                VehicleRow.year_start <= year,
                VehicleRow.year_end >= year,
            )
            .order_by(VehicleRow.year_start)
            .limit(1)
        )
        if store_hash:
            query = query.where(VehicleRow.store_hash == store_hash)
        row = self._session.execute(query).scalars().first()
        return self._to_domain(row) if row else None

    def year_bounds(self, store_hash: str | None = None) -> tuple[int, int] | None:
        query = select(func.min(VehicleRow.year_start), func.max(VehicleRow.year_end)).where(
            VehicleRow.is_active.is_(True)
        )
        if store_hash:
            query = query.where(VehicleRow.store_hash == store_hash)

        min_year, max_year = self._session.execute(query).one()
        if min_year is None or max_year is None:
            return None
        return int(min_year), int(max_year)

    def distinct_makes(self, year: int, store_hash: str | None = None) -> list[str]:
        query = (
            self._covering_query(year, store_hash, VehicleRow.make)
            .distinct()
            .order_by(VehicleRow.make)
        )
        return list(self._session.execute(query).scalars().all())

    def distinct_models(
        self, year: int, make: str, store_hash: str | None = None
    ) -> list[str]:
        query = (
            self._covering_query(year, store_hash, VehicleRow.model)
            .where(VehicleRow.make == make)
            .distinct()
            .order_by(VehicleRow.model)
        )
        return list(self._session.execute(query).scalars().all())

    def active_ids(self, store_hash: str | None = None) -> list[str]:
        query = select(VehicleRow.id).where(VehicleRow.is_active.is_(True))
        if store_hash:
            query = query.where(VehicleRow.store_hash == store_hash)
        return [str(vid) for vid in self._session.execute(query).scalars().all()]

    def _covering_query(
        self, year: int, store_hash: str | None, *columns: object
    ) -> Select:
        """Active ranges in scope whose span contains ``year``."""
        query = select(*columns) if columns else select(VehicleRow)
        query = query.where(
            VehicleRow.is_active.is_(True),
            VehicleRow.year_start <= year,
            VehicleRow.year_end >= year,
        )
        if store_hash:
            query = query.where(VehicleRow.store_hash == store_hash)
        return query

    def _get_row(self, vehicle_id: str) -> VehicleRow | None:
        try:
            query = select(VehicleRow).where(VehicleRow.id == UUID(vehicle_id))
        except ValueError:  # Invalid UUID format
            return None
        return self._session.execute(query).scalar_one_or_none()

    def _to_domain(self, row: VehicleRow) -> VehicleRange:
        """
        Convert database model (VehicleRow) to domain entity (VehicleRange).

        Args:
            row: SQLAlchemy VehicleRow model

        Returns:
            VehicleRange domain entity
        """
        return VehicleRange(
            id=str(row.id),  # Convert UUID to string
            make=row.make,
            model=row.model,
            year_start=row.year_start,
            year_end=row.year_end,
            is_active=row.is_active,
            store_hash=row.store_hash,
        )


def _parse_uuids(values: list[str]) -> list[UUID]:
    uuids = []
    for value in values:
        try:
            uuids.append(UUID(value))
        except ValueError:
            continue
    return uuids
