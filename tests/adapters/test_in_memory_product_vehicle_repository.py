"""Test suite for InMemoryProductVehicleRepository (link store contract)."""

from __future__ import annotations

import pytest

from ymm_fitment.adapters.in_memory_product_vehicle_repository import (
    InMemoryProductVehicleRepository,
)
from ymm_fitment.domain.vehicle import ProductVehicleLink


@pytest.fixture()
def repo() -> InMemoryProductVehicleRepository:
    return InMemoryProductVehicleRepository(
        [
            ProductVehicleLink(product_id="101", vehicle_id="v1"),
            ProductVehicleLink(product_id="101", vehicle_id="v2"),
            ProductVehicleLink(product_id="102", vehicle_id="v2"),
        ]
    )


def test_add_is_idempotent(repo: InMemoryProductVehicleRepository) -> None:
    """The pair is unique; a second insert reports no creation."""
    assert repo.add(ProductVehicleLink(product_id="101", vehicle_id="v1")) is False
    assert repo.add(ProductVehicleLink(product_id="103", vehicle_id="v1")) is True
    assert len(repo.list_all()) == 4


def test_product_ids_for_vehicles_are_distinct(repo: InMemoryProductVehicleRepository) -> None:
    """Product 101 is linked through both ranges but is listed once."""
    assert repo.product_ids_for_vehicles(["v1", "v2"]) == ["101", "102"]


def test_product_ids_for_no_vehicles(repo: InMemoryProductVehicleRepository) -> None:
    assert repo.product_ids_for_vehicles([]) == []


def test_vehicle_ids_for_product(repo: InMemoryProductVehicleRepository) -> None:
    assert repo.vehicle_ids_for_product("101") == ["v1", "v2"]
    assert repo.vehicle_ids_for_product("999") == []


def test_remove_existing_and_missing_links(repo: InMemoryProductVehicleRepository) -> None:
    assert repo.remove("101", "v1") is True
    assert repo.remove("101", "v1") is False
    assert repo.vehicle_ids_for_product("101") == ["v2"]


def test_remove_for_vehicle_returns_count(repo: InMemoryProductVehicleRepository) -> None:
    assert repo.remove_for_vehicle("v2") == 2
    assert repo.list_all() == [ProductVehicleLink(product_id="101", vehicle_id="v1")]


def test_count_for_vehicles(repo: InMemoryProductVehicleRepository) -> None:
    assert repo.count_for_vehicles(["v2"]) == 2
    assert repo.count_for_vehicles([]) == 0
