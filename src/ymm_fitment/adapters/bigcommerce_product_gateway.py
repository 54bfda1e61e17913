"""BigCommerce catalog implementation of ProductDetailGateway."""

from __future__ import annotations

import logging

import httpx

from ymm_fitment.domain.errors import UpstreamGatewayError
from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.domain.store import Store, clean_store_hash
from ymm_fitment.infra.config import BigCommerceConfig
from ymm_fitment.ports.product_detail_gateway import ProductDetailGateway

logger = logging.getLogger(__name__)

PRODUCTS_ENDPOINT = "/catalog/products"


class BigCommerceProductGateway(ProductDetailGateway):
    """
    Fetches visible products (with images) through the v3 catalog API.

    - One GET per batch using the ``id:in`` filter
    - Authenticates with the store's access token and the app client id
    - Every failure (transport, timeout, non-2xx, undecodable body) is
      raised as UpstreamGatewayError
    """

    def __init__(self, config: BigCommerceConfig, client: httpx.Client | None = None) -> None:
        """
        Args:
            config: Base URL, client id, batch limit and timeout
            client: Optional preconfigured client (tests pass one with a MockTransport)
        """
        self._config = config
        self._client = client or httpx.Client(timeout=config.timeout_seconds)

    @property
    def batch_limit(self) -> int:
        return self._config.batch_limit

    def fetch_batch(self, store: Store, product_ids: list[str]) -> list[ProductDetail]:
        if len(product_ids) > self.batch_limit:
            raise ValueError(
                f"Batch of {len(product_ids)} ids exceeds the limit of {self.batch_limit}"
            )

        url = self._config.store_api_url(clean_store_hash(store.store_hash)) + PRODUCTS_ENDPOINT
        params = {
            "id:in": ",".join(product_ids),
            "include": "images",
            "is_visible": "true",
            "limit": str(self.batch_limit),
        }
        headers = {
            "X-Auth-Token": store.access_token,
            "X-Auth-Client": self._config.client_id,
            "Accept": "application/json",
        }

        logger.debug(
            "Fetching product batch",
            extra={"store_hash": store.store_hash, "batch_size": len(product_ids)},
        )

        try:
            response = self._client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.error(
                "BigCommerce API exception",
                extra={
                    "store_hash": store.store_hash,
                    "endpoint": PRODUCTS_ENDPOINT,
                    "error_type": type(exc).__name__,
                    "error_message": str(exc),
                },
            )
            raise UpstreamGatewayError(
                f"Catalog request failed: {exc}",
                endpoint=PRODUCTS_ENDPOINT,
            ) from exc

        if not response.is_success:
            logger.error(
                "BigCommerce API error",
                extra={
                    "store_hash": store.store_hash,
                    "endpoint": PRODUCTS_ENDPOINT,
                    "status": response.status_code,
                    "body": response.text[:500],
                },
            )
            raise UpstreamGatewayError(
                f"API call failed: {response.status_code}",
                endpoint=PRODUCTS_ENDPOINT,
                status=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise UpstreamGatewayError(
                "Catalog response was not valid JSON",
                endpoint=PRODUCTS_ENDPOINT,
            ) from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        return [ProductDetail.from_catalog_payload(item) for item in data or []]

    def close(self) -> None:
        self._client.close()
