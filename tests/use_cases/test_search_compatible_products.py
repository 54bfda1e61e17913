"""
Test suite for SearchCompatibleProducts.

The composite storefront search: selection → product ids → catalog details.
"""

from __future__ import annotations

from datetime import datetime, timezone
from unittest.mock import Mock, PropertyMock

import pytest

from ymm_fitment.adapters.in_memory_product_vehicle_repository import (
    InMemoryProductVehicleRepository,
)
from ymm_fitment.adapters.in_memory_store_repository import InMemoryStoreRepository
from ymm_fitment.adapters.in_memory_vehicle_catalog_repository import (
    InMemoryVehicleCatalogRepository,
)
from ymm_fitment.domain.errors import NotFoundError, ProductResolutionError, UpstreamGatewayError
from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.domain.store import Store
from ymm_fitment.domain.vehicle import ProductVehicleLink, VehicleRange
from ymm_fitment.ports.product_detail_gateway import ProductDetailGateway
from ymm_fitment.use_cases.fetch_product_details import FetchProductDetails
from ymm_fitment.use_cases.resolve_compatible_products import ResolveCompatibleProducts
from ymm_fitment.use_cases.search_compatible_products import (
    SearchCompatibleProducts,
    SearchCompatibleProductsRequest,
)
from ymm_fitment.use_cases.store_health import GetStoreHealth, GetWidgetConfig

STORE = "abc123"


@pytest.fixture()
def vehicles() -> InMemoryVehicleCatalogRepository:
    return InMemoryVehicleCatalogRepository(
        [
            VehicleRange("v1", "Ford", "F-150", 2015, 2020, store_hash=STORE),
            VehicleRange("v2", "Ford", "F-150", 2019, 2023, store_hash=STORE),
            VehicleRange("v3", "Ram", "1500", 2019, 2023, is_active=False, store_hash=STORE),
        ]
    )


@pytest.fixture()
def links() -> InMemoryProductVehicleRepository:
    return InMemoryProductVehicleRepository(
        [
            ProductVehicleLink("101", "v1"),
            ProductVehicleLink("101", "v2"),
            ProductVehicleLink("102", "v2"),
            ProductVehicleLink("103", "v3"),
        ]
    )


@pytest.fixture()
def stores() -> InMemoryStoreRepository:
    return InMemoryStoreRepository(
        [
            Store(store_hash=STORE, access_token="token"),
            Store(store_hash="paused", access_token="token", is_active=False),
        ]
    )


@pytest.fixture()
def gateway() -> Mock:
    mock = Mock(spec=ProductDetailGateway)
    type(mock).batch_limit = PropertyMock(return_value=50)
    mock.fetch_batch.side_effect = lambda store, ids: [
        ProductDetail(id=pid, name=f"Part {pid}") for pid in ids
    ]
    return mock


@pytest.fixture()
def use_case(
    vehicles: InMemoryVehicleCatalogRepository,
    links: InMemoryProductVehicleRepository,
    stores: InMemoryStoreRepository,
    gateway: Mock,
) -> SearchCompatibleProducts:
    return SearchCompatibleProducts(
        resolver=ResolveCompatibleProducts(vehicles, links),
        fetch_details=FetchProductDetails(gateway),
        store_repository=stores,
    )


# ==============================================================================
# SearchCompatibleProducts
# ==============================================================================


def test_search_returns_each_product_once(use_case: SearchCompatibleProducts) -> None:
    result = use_case.execute(SearchCompatibleProductsRequest(STORE, 2019, "Ford", "F-150"))

    assert sorted(p.id for p in result.products) == ["101", "102"]
    assert result.total == 2
    assert result.selection is not None
    assert result.selection.store_hash == STORE


@pytest.mark.parametrize(
    ("year", "make", "model"),
    [(None, "Ford", "F-150"), (2019, None, "F-150"), (2019, "Ford", None), (2019, "", "F-150")],
)
def test_incomplete_selection_is_empty(
    use_case: SearchCompatibleProducts,
    gateway: Mock,
    year: int | None,
    make: str | None,
    model: str | None,
) -> None:
    result = use_case.execute(SearchCompatibleProductsRequest(STORE, year, make, model))

    assert result.products == []
    assert result.selection is None
    gateway.fetch_batch.assert_not_called()


def test_no_compatible_products_skips_catalog(
    use_case: SearchCompatibleProducts, gateway: Mock
) -> None:
    """The inactive Ram range contributes nothing."""
    result = use_case.execute(SearchCompatibleProductsRequest(STORE, 2020, "Ram", "1500"))

    assert result.products == []
    assert result.selection is not None
    gateway.fetch_batch.assert_not_called()


def test_unknown_store_with_products_is_not_found(
    vehicles: InMemoryVehicleCatalogRepository,
    links: InMemoryProductVehicleRepository,
    gateway: Mock,
) -> None:
    use_case = SearchCompatibleProducts(
        resolver=ResolveCompatibleProducts(vehicles, links),
        fetch_details=FetchProductDetails(gateway),
        store_repository=InMemoryStoreRepository(),
    )

    with pytest.raises(NotFoundError):
        use_case.execute(SearchCompatibleProductsRequest(STORE, 2019, "Ford", "F-150"))


def test_gateway_failure_becomes_resolution_error(
    use_case: SearchCompatibleProducts, gateway: Mock
) -> None:
    gateway.fetch_batch.side_effect = UpstreamGatewayError("API call failed: 502")

    with pytest.raises(ProductResolutionError):
        use_case.execute(SearchCompatibleProductsRequest(STORE, 2019, "Ford", "F-150"))


# ==============================================================================
# Store health and widget config
# ==============================================================================


def test_store_health_counts_active_scope(
    stores: InMemoryStoreRepository,
    vehicles: InMemoryVehicleCatalogRepository,
    links: InMemoryProductVehicleRepository,
) -> None:
    now = datetime(2026, 1, 1, tzinfo=timezone.utc)

    health = GetStoreHealth(stores, vehicles, links, clock=lambda: now).execute(STORE)

    assert health.status == "healthy"
    assert health.store_active is True
    assert health.vehicle_count == 2
    assert health.compatibility_count == 3  # link to inactive v3 not counted
    assert health.timestamp == now


def test_store_health_unknown_store(
    stores: InMemoryStoreRepository,
    vehicles: InMemoryVehicleCatalogRepository,
    links: InMemoryProductVehicleRepository,
) -> None:
    with pytest.raises(NotFoundError):
        GetStoreHealth(stores, vehicles, links).execute("missing")


def test_widget_config_requires_known_store(stores: InMemoryStoreRepository) -> None:
    assert GetWidgetConfig(stores).execute(STORE).store_hash == STORE

    with pytest.raises(NotFoundError):
        GetWidgetConfig(stores).execute("missing")
