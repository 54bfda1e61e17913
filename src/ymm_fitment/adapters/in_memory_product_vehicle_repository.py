from __future__ import annotations

from ymm_fitment.domain.vehicle import ProductVehicleLink
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository


class InMemoryProductVehicleRepository(ProductVehicleRepository):
    """
    Canonical contract implementation for tests.

    Links are kept in insertion order; the dict key enforces pair uniqueness.
    """

    def __init__(self, links: list[ProductVehicleLink] | None = None) -> None:
        self._links: dict[tuple[str, str], ProductVehicleLink] = {}
        for link in links or []:
            self.add(link)

    def add(self, link: ProductVehicleLink) -> bool:
        key = (link.product_id, link.vehicle_id)
        if key in self._links:
            return False
        self._links[key] = link
        return True

    def remove(self, product_id: str, vehicle_id: str) -> bool:
        return self._links.pop((product_id, vehicle_id), None) is not None

    def remove_for_vehicle(self, vehicle_id: str) -> int:
        keys = [key for key in self._links if key[1] == vehicle_id]
        for key in keys:
            del self._links[key]
        return len(keys)

    def product_ids_for_vehicles(self, vehicle_ids: list[str]) -> list[str]:
        wanted = set(vehicle_ids)
        return list(
            dict.fromkeys(
                link.product_id for link in self._links.values() if link.vehicle_id in wanted
            )
        )

    def vehicle_ids_for_product(self, product_id: str) -> list[str]:
        return [link.vehicle_id for link in self._links.values() if link.product_id == product_id]

    def count_for_vehicles(self, vehicle_ids: list[str]) -> int:
        wanted = set(vehicle_ids)
        return sum(1 for link in self._links.values() if link.vehicle_id in wanted)

    def list_all(self) -> list[ProductVehicleLink]:
        return list(self._links.values())
