"""Tests for batched product detail enrichment."""

from __future__ import annotations

from unittest.mock import Mock, PropertyMock

import pytest

from ymm_fitment.domain.errors import ProductResolutionError, UpstreamGatewayError
from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.domain.store import Store
from ymm_fitment.ports.product_detail_gateway import ProductDetailGateway
from ymm_fitment.use_cases.fetch_product_details import FetchProductDetails, chunked


@pytest.fixture()
def store() -> Store:
    return Store(store_hash="abc123", access_token="token")


@pytest.fixture()
def gateway() -> Mock:
    """Gateway with the catalog's 50-id ceiling that echoes each id back."""
    mock = Mock(spec=ProductDetailGateway)
    type(mock).batch_limit = PropertyMock(return_value=50)
    mock.fetch_batch.side_effect = lambda store, ids: [
        ProductDetail(id=pid, name=f"Product {pid}") for pid in ids
    ]
    return mock


def _ids(count: int) -> list[str]:
    return [str(n) for n in range(1, count + 1)]


def test_chunked_splits_into_fixed_batches() -> None:
    assert [len(batch) for batch in chunked(_ids(120), 50)] == [50, 50, 20]


def test_chunked_rejects_zero_size() -> None:
    with pytest.raises(ValueError):
        list(chunked(_ids(3), 0))


def test_120_ids_are_fetched_in_three_batches(gateway: Mock, store: Store) -> None:
    products = FetchProductDetails(gateway).execute(store, _ids(120))

    assert [len(call.args[1]) for call in gateway.fetch_batch.call_args_list] == [50, 50, 20]
    assert len(products) == 120


def test_empty_ids_make_no_calls(gateway: Mock, store: Store) -> None:
    assert FetchProductDetails(gateway).execute(store, []) == []
    gateway.fetch_batch.assert_not_called()


def test_failing_second_batch_fails_whole_call(gateway: Mock, store: Store) -> None:
    """No partial result: the first batch's products are discarded."""
    calls = {"count": 0}

    def fetch(store: Store, ids: list[str]) -> list[ProductDetail]:
        calls["count"] += 1
        if calls["count"] == 2:
            raise UpstreamGatewayError("API call failed: 500", status=500)
        return [ProductDetail(id=pid, name=pid) for pid in ids]

    gateway.fetch_batch.side_effect = fetch

    with pytest.raises(ProductResolutionError) as exc_info:
        FetchProductDetails(gateway).execute(store, _ids(120))

    assert gateway.fetch_batch.call_count == 2
    assert exc_info.value.message == "Failed to fetch product details: API call failed: 500"
    assert exc_info.value.context["batch_number"] == 2
    assert isinstance(exc_info.value.__cause__, UpstreamGatewayError)
