from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ymm_fitment.domain.vehicle import (
    Paging,
    VehicleListFilters,
    VehicleRange,
    VehicleRangeDraft,
)


@dataclass(frozen=True)
class VehicleListResult:
    """Result from listing vehicle ranges including pagination metadata."""

    vehicles: list[VehicleRange]
    total_count: int | None = None  # Total matching ranges before paging (None if not calculated)


class VehicleCatalogRepository(ABC):
    """
    Port for vehicle range data access.

    Every query that takes a ``store_hash`` restricts itself to that scope
    when it is given and spans all scopes when it is None.

    Contract (Preconditions):
        - drafts and paging parameters must be pre-validated by caller (UseCase)
        - Implementations trust inputs are valid and do not re-validate
    """

    @abstractmethod
    def add(self, draft: VehicleRangeDraft) -> VehicleRange:
        """Persist a new range and return it with its assigned id."""
        ...

    @abstractmethod
    def get_by_id(self, vehicle_id: str) -> VehicleRange | None: ...

    @abstractmethod
    def get_many(self, vehicle_ids: list[str]) -> list[VehicleRange]:
        """Return the ranges that exist among ``vehicle_ids`` (unknown ids are skipped)."""
        ...

    @abstractmethod
    def update(self, vehicle_id: str, draft: VehicleRangeDraft) -> VehicleRange | None:
        """Replace make, model, bounds and active flag. None if the id is unknown."""
        ...

    @abstractmethod
    def delete(self, vehicle_id: str) -> bool:
        """Delete a range. Returns False if the id is unknown."""
        ...

    @abstractmethod
    def list(self, filters: VehicleListFilters, paging: Paging) -> VehicleListResult:
        """
        List ranges ordered by make, model, year_start.

        ``filters.search`` is a case-insensitive substring match on make or model.
        """
        ...

    @abstractmethod
    def find_compatible(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> list[VehicleRange]:
        """
        Active ranges with exactly this make and model whose span covers ``year``.

        No matches is an empty list, never an error.
        """
        ...

    @abstractmethod
    def find_covering(
        self, year: int, make: str, model: str, store_hash: str | None = None
    ) -> VehicleRange | None:
        """First range (active or not) for make/model covering ``year``, by year_start."""
        ...

    @abstractmethod
    def year_bounds(self, store_hash: str | None = None) -> tuple[int, int] | None:
        """(min year_start, max year_end) over active ranges, or None when there are none."""
        ...

    @abstractmethod
    def distinct_makes(self, year: int, store_hash: str | None = None) -> list[str]:
        """Distinct makes of active ranges covering ``year``, ascending."""
        ...

    @abstractmethod
    def distinct_models(
        self, year: int, make: str, store_hash: str | None = None
    ) -> list[str]:
        """Distinct models of active ranges for ``make`` covering ``year``, ascending."""
        ...

    @abstractmethod
    def active_ids(self, store_hash: str | None = None) -> list[str]: ...
