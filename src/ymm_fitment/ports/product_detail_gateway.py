from __future__ import annotations

from abc import ABC, abstractmethod

from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.domain.store import Store


class ProductDetailGateway(ABC):
    """
    Port for the external catalog that supplies product display data.

    The catalog bounds how many ids one request may ask for; callers must
    split larger sets into batches of at most ``batch_limit`` ids.
    """

    @property
    @abstractmethod
    def batch_limit(self) -> int: ...

    @abstractmethod
    def fetch_batch(self, store: Store, product_ids: list[str]) -> list[ProductDetail]:
        """
        Fetch display data for at most ``batch_limit`` products.

        Raises:
            UpstreamGatewayError: On transport failure, timeout or a non-success response
        """
        ...

    def close(self) -> None:
        """Release pooled connections. Adapters without any keep the no-op."""
