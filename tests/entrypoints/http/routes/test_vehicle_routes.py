"""Tests for the vehicle range administration endpoints."""

from __future__ import annotations

import uuid
from unittest.mock import Mock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ymm_fitment.adapters.in_memory_product_vehicle_repository import (
    InMemoryProductVehicleRepository,
)
from ymm_fitment.adapters.in_memory_vehicle_catalog_repository import (
    InMemoryVehicleCatalogRepository,
)
from ymm_fitment.domain.vehicle import ProductVehicleLink, VehicleRange
from ymm_fitment.entrypoints.http.dependencies import (
    get_create_vehicle_use_case,
    get_delete_vehicle_use_case,
    get_get_vehicle_use_case,
    get_import_vehicles_use_case,
    get_list_vehicles_use_case,
    get_update_vehicle_use_case,
    get_vehicle_products_use_case,
)
from ymm_fitment.entrypoints.http.exception_handlers import register_exception_handlers
from ymm_fitment.entrypoints.http.routes.vehicles import router
from ymm_fitment.use_cases.bulk_import import ImportVehicleRanges
from ymm_fitment.use_cases.manage_associations import GetVehicleProducts
from ymm_fitment.use_cases.manage_vehicle_ranges import (
    CreateVehicleRange,
    DeleteVehicleRange,
    GetVehicleRange,
    ListVehicleRanges,
    UpdateVehicleRange,
)

F150_ID = "00000000-0000-0000-0000-000000000001"
SILVERADO_ID = "00000000-0000-0000-0000-000000000002"


@pytest.fixture
def vehicles() -> InMemoryVehicleCatalogRepository:
    return InMemoryVehicleCatalogRepository(
        [
            VehicleRange(F150_ID, "Ford", "F-150", 2015, 2020, store_hash="abc123"),
            VehicleRange(SILVERADO_ID, "Chevrolet", "Silverado 1500", 2019, 2023),
        ]
    )


@pytest.fixture
def links() -> InMemoryProductVehicleRepository:
    return InMemoryProductVehicleRepository(
        [ProductVehicleLink("101", F150_ID), ProductVehicleLink("102", F150_ID)]
    )


@pytest.fixture
def app(
    vehicles: InMemoryVehicleCatalogRepository, links: InMemoryProductVehicleRepository
) -> FastAPI:
    test_app = FastAPI()
    register_exception_handlers(test_app)
    test_app.include_router(router)

    overrides = test_app.dependency_overrides
    overrides[get_list_vehicles_use_case] = lambda: ListVehicleRanges(vehicles)
    overrides[get_create_vehicle_use_case] = lambda: CreateVehicleRange(vehicles)
    overrides[get_get_vehicle_use_case] = lambda: GetVehicleRange(vehicles)
    overrides[get_update_vehicle_use_case] = lambda: UpdateVehicleRange(vehicles)
    overrides[get_delete_vehicle_use_case] = lambda: DeleteVehicleRange(vehicles, links)
    overrides[get_import_vehicles_use_case] = lambda: ImportVehicleRanges(vehicles)
    overrides[get_vehicle_products_use_case] = lambda: GetVehicleProducts(vehicles, links)

    return test_app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, raise_server_exceptions=False)


# ==============================================================================
# List
# ==============================================================================


def test_list_vehicles_ordered_by_make(client: TestClient) -> None:
    response = client.get("/vehicles")

    assert response.status_code == 200
    data = response.json()
    assert [v["make"] for v in data["vehicles"]] == ["Chevrolet", "Ford"]
    assert data["total"] == 2
    assert (data["offset"], data["limit"]) == (0, 20)


def test_list_vehicles_filters(client: TestClient) -> None:
    by_store = client.get("/vehicles", params={"store_hash": "abc123"}).json()
    by_search = client.get("/vehicles", params={"search": "silver"}).json()

    assert [v["id"] for v in by_store["vehicles"]] == [F150_ID]
    assert [v["id"] for v in by_search["vehicles"]] == [SILVERADO_ID]


def test_list_vehicles_rejects_limit_over_max(client: TestClient) -> None:
    response = client.get("/vehicles", params={"limit": 500})

    assert response.status_code == 422
    assert response.json()["code"] == "VALIDATION_ERROR"


# ==============================================================================
# Create / Get / Update
# ==============================================================================


def test_create_vehicle(client: TestClient, vehicles: InMemoryVehicleCatalogRepository) -> None:
    response = client.post(
        "/vehicles",
        json={"make": " Ram ", "model": "1500", "year_start": 2019, "year_end": 2023},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["make"] == "Ram"
    assert data["is_active"] is True
    assert vehicles.get_by_id(data["id"]) is not None


def test_create_vehicle_with_inverted_years(client: TestClient) -> None:
    response = client.post(
        "/vehicles",
        json={"make": "Ram", "model": "1500", "year_start": 2023, "year_end": 2019},
    )

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "year_end"


def test_create_vehicle_missing_field(client: TestClient) -> None:
    response = client.post("/vehicles", json={"make": "Ram", "year_start": 2019})

    assert response.status_code == 422
    fields = {e["field"] for e in response.json()["errors"]}
    assert {"model", "year_end"} <= fields


def test_get_vehicle(client: TestClient) -> None:
    response = client.get(f"/vehicles/{F150_ID}")

    assert response.status_code == 200
    assert response.json()["model"] == "F-150"


def test_get_vehicle_invalid_uuid(client: TestClient) -> None:
    response = client.get("/vehicles/not-a-uuid")

    assert response.status_code == 422
    assert response.json()["errors"][0]["code"] == "INVALID_UUID"


def test_get_vehicle_not_found(client: TestClient) -> None:
    assert client.get(f"/vehicles/{uuid.uuid4()}").status_code == 404


def test_update_vehicle(client: TestClient) -> None:
    response = client.put(
        f"/vehicles/{F150_ID}",
        json={
            "make": "Ford",
            "model": "F-150",
            "year_start": 2015,
            "year_end": 2021,
            "is_active": False,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["year_end"] == 2021
    assert data["is_active"] is False
    assert data["store_hash"] == "abc123"


def test_update_vehicle_not_found(client: TestClient) -> None:
    response = client.put(
        f"/vehicles/{uuid.uuid4()}",
        json={"make": "Ford", "model": "F-150", "year_start": 2015, "year_end": 2021},
    )

    assert response.status_code == 404


# ==============================================================================
# Linked products
# ==============================================================================


def test_get_vehicle_products(client: TestClient) -> None:
    response = client.get(f"/vehicles/{F150_ID}/products")

    assert response.status_code == 200
    assert response.json() == {"vehicle_id": F150_ID, "product_ids": ["101", "102"], "total": 2}


def test_get_vehicle_products_without_links(client: TestClient) -> None:
    response = client.get(f"/vehicles/{SILVERADO_ID}/products")

    assert response.status_code == 200
    assert response.json()["product_ids"] == []


def test_get_vehicle_products_unknown_vehicle(client: TestClient) -> None:
    assert client.get(f"/vehicles/{uuid.uuid4()}/products").status_code == 404
    assert client.get("/vehicles/not-a-uuid/products").status_code == 422


# ==============================================================================
# Delete
# ==============================================================================


def test_delete_vehicle_removes_links(
    client: TestClient,
    vehicles: InMemoryVehicleCatalogRepository,
    links: InMemoryProductVehicleRepository,
) -> None:
    response = client.delete(f"/vehicles/{F150_ID}")

    assert response.status_code == 200
    assert response.json() == {"message": "Vehicle deleted successfully", "removed_links": 2}
    assert vehicles.get_by_id(F150_ID) is None
    assert links.list_all() == []


def test_delete_vehicle_not_found(client: TestClient) -> None:
    assert client.delete(f"/vehicles/{uuid.uuid4()}").status_code == 404


# ==============================================================================
# Bulk import
# ==============================================================================


def test_bulk_import_rows_reports_each_failure(client: TestClient) -> None:
    response = client.post(
        "/vehicles/bulk-import",
        json={
            "store_hash": "abc123",
            "rows": [
                {"make": "Ford", "model": "Ranger", "year_start": 2019, "year_end": 2023},
                {"model": "Colorado", "year_start": 2015, "year_end": 2022},
                {"make": "Toyota", "model": "Tacoma", "year_start": 2016, "year_end": 2023},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 2
    assert data["failed"] == 1
    assert data["errors"] == ["Row 2: make: Must not be empty"]
    assert data["message"] == "Import completed. 2 vehicles imported, 1 failed."
    assert [r["status"] for r in data["results"]] == ["imported", "failed", "imported"]


def test_bulk_import_non_object_row_fails_only_that_row(client: TestClient) -> None:
    ok = {"make": "Ford", "model": "Ranger", "year_start": 2019, "year_end": 2023}

    response = client.post("/vehicles/bulk-import", json={"rows": [ok, ok, None, ok, ok]})

    assert response.status_code == 200
    data = response.json()
    assert data["imported"] == 4
    assert data["failed"] == 1
    assert data["errors"] == ["Row 3: row: Must be an object"]


def test_bulk_import_csv(client: TestClient, vehicles: InMemoryVehicleCatalogRepository) -> None:
    response = client.post(
        "/vehicles/bulk-import",
        json={"csv_data": "year_start,year_end,make,model\n2016,2023,Toyota,Tacoma\n"},
    )

    assert response.status_code == 200
    assert response.json()["imported"] == 1
    assert len(client.get("/vehicles").json()["vehicles"]) == 3


def test_bulk_import_requires_rows_or_csv(app: FastAPI) -> None:
    use_case = Mock(spec=ImportVehicleRanges)
    app.dependency_overrides[get_import_vehicles_use_case] = lambda: use_case
    client = TestClient(app, raise_server_exceptions=False)

    response = client.post("/vehicles/bulk-import", json={})

    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "rows"
    use_case.execute.assert_not_called()
