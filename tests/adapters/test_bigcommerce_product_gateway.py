"""
Tests for BigCommerceProductGateway.

The HTTP layer is replaced with httpx.MockTransport, so requests are
inspected as sent and responses are scripted per test.
"""

from __future__ import annotations

from decimal import Decimal

import httpx
import pytest

from ymm_fitment.adapters.bigcommerce_product_gateway import BigCommerceProductGateway
from ymm_fitment.domain.errors import UpstreamGatewayError
from ymm_fitment.domain.store import Store
from ymm_fitment.infra.config import BigCommerceConfig


@pytest.fixture()
def store() -> Store:
    return Store(store_hash="stores/abc123", access_token="secret-token")


@pytest.fixture()
def config() -> BigCommerceConfig:
    return BigCommerceConfig(
        api_base_url="https://api.example.test",
        client_id="client-1",
        batch_limit=3,
    )


def _gateway(config: BigCommerceConfig, handler) -> BigCommerceProductGateway:
    return BigCommerceProductGateway(
        config=config,
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )


def test_fetch_batch_sends_filtered_request(config: BigCommerceConfig, store: Store) -> None:
    """One GET with id:in, auth headers and the store-scoped v3 URL."""
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"data": []})

    _gateway(config, handler).fetch_batch(store, ["1", "2"])

    assert len(seen) == 1
    request = seen[0]
    assert request.url.path == "/stores/abc123/v3/catalog/products"
    assert request.url.params["id:in"] == "1,2"
    assert request.url.params["include"] == "images"
    assert request.url.params["is_visible"] == "true"
    assert request.headers["X-Auth-Token"] == "secret-token"
    assert request.headers["X-Auth-Client"] == "client-1"


def test_fetch_batch_maps_products(config: BigCommerceConfig, store: Store) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json={
                "data": [
                    {
                        "id": 11,
                        "name": "Tonneau Cover",
                        "price": "499.99",
                        "sku": "TC-1",
                        "images": [],
                        "custom_url": {"url": "/tonneau/"},
                        "description": "<p>Hard fold</p>",
                    }
                ]
            },
        )

    products = _gateway(config, handler).fetch_batch(store, ["11"])

    assert len(products) == 1
    assert products[0].id == "11"
    assert products[0].price == Decimal("499.99")
    assert products[0].description == "Hard fold"


def test_fetch_batch_rejects_oversized_batch(config: BigCommerceConfig, store: Store) -> None:
    gateway = _gateway(config, lambda request: httpx.Response(200, json={"data": []}))

    with pytest.raises(ValueError):
        gateway.fetch_batch(store, ["1", "2", "3", "4"])


def test_non_success_status_raises_gateway_error(config: BigCommerceConfig, store: Store) -> None:
    gateway = _gateway(config, lambda request: httpx.Response(503, text="unavailable"))

    with pytest.raises(UpstreamGatewayError) as exc_info:
        gateway.fetch_batch(store, ["1"])

    assert exc_info.value.message == "API call failed: 503"
    assert exc_info.value.context["status"] == 503


def test_transport_failure_raises_gateway_error(config: BigCommerceConfig, store: Store) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(UpstreamGatewayError) as exc_info:
        _gateway(config, handler).fetch_batch(store, ["1"])

    assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)


def test_invalid_json_raises_gateway_error(config: BigCommerceConfig, store: Store) -> None:
    gateway = _gateway(config, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UpstreamGatewayError):
        gateway.fetch_batch(store, ["1"])


def test_close_releases_http_client(config: BigCommerceConfig) -> None:
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    gateway = BigCommerceProductGateway(config=config, client=client)

    gateway.close()

    assert client.is_closed


def test_config_rejects_non_positive_batch_limit() -> None:
    with pytest.raises(ValueError):
        BigCommerceConfig(batch_limit=0)


def test_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("BIGCOMMERCE_API_BASE_URL", "https://api.example.test/")
    monkeypatch.setenv("BIGCOMMERCE_BATCH_LIMIT", "25")
    monkeypatch.delenv("BIGCOMMERCE_CLIENT_ID", raising=False)

    config = BigCommerceConfig.from_env()

    assert config.batch_limit == 25
    assert config.client_id == ""
    assert config.store_api_url("abc123") == "https://api.example.test/stores/abc123/v3"
