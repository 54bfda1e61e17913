from __future__ import annotations

import logging
from typing import Iterator

from ymm_fitment.domain.errors import ProductResolutionError, UpstreamGatewayError
from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.domain.store import Store
from ymm_fitment.ports.product_detail_gateway import ProductDetailGateway

logger = logging.getLogger(__name__)


def chunked(items: list[str], size: int) -> Iterator[list[str]]:
    """Consecutive slices of at most ``size`` items; the last one may be short."""
    if size <= 0:
        raise ValueError("size must be > 0")
    for start in range(0, len(items), size):
        yield items[start : start + size]


class FetchProductDetails:
    """
    Enriches product ids into display records through the catalog gateway.

    Ids are split into batches of ``gateway.batch_limit`` and fetched one
    batch at a time. There is no partial-result contract: the first failing
    batch aborts the whole call with ProductResolutionError.
    """

    def __init__(self, gateway: ProductDetailGateway) -> None:
        self._gateway = gateway

    def execute(self, store: Store, product_ids: list[str]) -> list[ProductDetail]:
        """
        Args:
            store: Store whose catalog (and credentials) to query
            product_ids: External product ids; may exceed the batch limit

        Returns:
            Concatenated records of every batch (no cross-batch order guarantee)

        Raises:
            ProductResolutionError: If any batch fails; chained to the cause
        """
        products: list[ProductDetail] = []

        for batch_number, batch in enumerate(chunked(product_ids, self._gateway.batch_limit), 1):
            try:
                products.extend(self._gateway.fetch_batch(store, batch))
            except UpstreamGatewayError as exc:
                logger.error(
                    "Product batch fetch failed",
                    extra={
                        "store_hash": store.store_hash,
                        "batch_number": batch_number,
                        "batch_size": len(batch),
                        "total_ids": len(product_ids),
                        "error_message": exc.message,
                    },
                )
                raise ProductResolutionError(
                    f"Failed to fetch product details: {exc.message}",
                    batch_number=batch_number,
                ) from exc

        return products
