"""
Tests for FastAPI application factory.

Verifies application metadata, documentation endpoints and router wiring.
Routes are checked through the OpenAPI schema so no dependency (and no
database) is triggered.
"""

from __future__ import annotations

from unittest.mock import patch

from fastapi import FastAPI
from fastapi.testclient import TestClient

from ymm_fitment.entrypoints.http.app import build_app


# ==============================================================================
# Application Metadata
# ==============================================================================


def test_build_app_returns_fastapi_instance() -> None:
    assert isinstance(build_app(), FastAPI)


def test_app_has_title_and_version() -> None:
    app = build_app()

    assert app.title == "YMM Fitment API"
    assert app.version == "0.1.0"


def test_app_has_description() -> None:
    app = build_app()
    assert "Year/Make/Model" in app.description


def test_app_has_license_info() -> None:
    app = build_app()
    assert app.license_info is not None
    assert app.license_info["name"] == "Proprietary"


# ==============================================================================
# Documentation URLs
# ==============================================================================


def test_app_documentation_urls() -> None:
    app = build_app()

    assert app.docs_url == "/docs"
    assert app.redoc_url == "/redoc"
    assert app.openapi_url == "/openapi.json"


def test_app_documentation_endpoints_are_accessible() -> None:
    client = TestClient(build_app())

    assert client.get("/docs").status_code == 200
    assert client.get("/redoc").status_code == 200

    response = client.get("/openapi.json")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"


# ==============================================================================
# Router Registration
# ==============================================================================


def test_app_registers_storefront_routes() -> None:
    paths = build_app().openapi()["paths"]

    for suffix in ("years", "makes", "models", "search", "check", "config", "health"):
        assert f"/ymm/{{store_hash}}/{suffix}" in paths


def test_app_registers_admin_routes() -> None:
    paths = build_app().openapi()["paths"]

    assert "/vehicles" in paths
    assert "/vehicles/{vehicle_id}" in paths
    assert "/vehicles/bulk-import" in paths
    assert "/vehicles/{vehicle_id}/products" in paths
    assert "/products/{product_id}/vehicles" in paths
    assert "/products/{product_id}/vehicles/{vehicle_id}" in paths
    assert "/product-vehicles/import" in paths
    assert "/product-vehicles/export" in paths


def test_openapi_documents_search_parameters() -> None:
    search = build_app().openapi()["paths"]["/ymm/{store_hash}/search"]["get"]

    assert search["tags"] == ["Storefront"]
    assert search["summary"] == "Search compatible products"
    names = {p["name"] for p in search["parameters"]}
    assert {"store_hash", "year", "make", "model"} <= names
    assert "500" in search["responses"]


def test_openapi_documents_vehicle_methods() -> None:
    paths = build_app().openapi()["paths"]

    assert set(paths["/vehicles"]) == {"get", "post"}
    assert set(paths["/vehicles/{vehicle_id}"]) == {"get", "put", "delete"}


# ==============================================================================
# Route Accessibility
# ==============================================================================


def test_health_endpoint_responds() -> None:
    client = TestClient(build_app())

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_app_returns_404_for_unknown_routes() -> None:
    client = TestClient(build_app())

    assert client.get("/unknown").status_code == 404
    assert client.get("/ymm").status_code == 404


# ==============================================================================
# Application Structure
# ==============================================================================


def test_app_module_exports_app_instance() -> None:
    from ymm_fitment.entrypoints.http.app import app

    assert isinstance(app, FastAPI)
    assert app.title == "YMM Fitment API"


def test_shutdown_closes_catalog_gateway() -> None:
    with patch("ymm_fitment.entrypoints.http.app.close_product_detail_gateway") as close:
        with TestClient(build_app()):
            close.assert_not_called()

    close.assert_called_once_with()
