from __future__ import annotations

from abc import ABC, abstractmethod

from ymm_fitment.domain.vehicle import ProductVehicleLink


class ProductVehicleRepository(ABC):
    """
    Port for product ↔ vehicle range associations.

    ``(product_id, vehicle_id)`` pairs are unique: adding an existing pair
    is a no-op, never a second row.
    """

    @abstractmethod
    def add(self, link: ProductVehicleLink) -> bool:
        """Idempotently store a link. Returns True only if a new row was created."""
        ...

    @abstractmethod
    def remove(self, product_id: str, vehicle_id: str) -> bool:
        """Delete one link. Returns False (and does nothing) if it was absent."""
        ...

    @abstractmethod
    def remove_for_vehicle(self, vehicle_id: str) -> int:
        """Delete every link to a vehicle range. Returns the number removed."""
        ...

    @abstractmethod
    def product_ids_for_vehicles(self, vehicle_ids: list[str]) -> list[str]:
        """Distinct product ids linked to any of ``vehicle_ids``."""
        ...

    @abstractmethod
    def vehicle_ids_for_product(self, product_id: str) -> list[str]: ...

    @abstractmethod
    def count_for_vehicles(self, vehicle_ids: list[str]) -> int: ...

    @abstractmethod
    def list_all(self) -> list[ProductVehicleLink]: ...
