"""Environment-backed configuration for the infrastructure edge.

Values are read once where adapters are built and handed to constructors;
nothing here is mutated at runtime.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_BIGCOMMERCE_API_BASE_URL = "https://api.bigcommerce.com"
DEFAULT_BIGCOMMERCE_BATCH_LIMIT = 50  # catalog API ceiling for id:in filters
DEFAULT_BIGCOMMERCE_TIMEOUT_SECONDS = 15.0


def database_url() -> str:
    url = os.getenv("DATABASE_URL")

    if not url:
        raise RuntimeError("DATABASE_URL environment variable is not set")

    return url


@dataclass(frozen=True, slots=True)
class BigCommerceConfig:
    """Connection settings for the BigCommerce catalog API."""

    api_base_url: str = DEFAULT_BIGCOMMERCE_API_BASE_URL
    client_id: str = ""
    batch_limit: int = DEFAULT_BIGCOMMERCE_BATCH_LIMIT
    timeout_seconds: float = DEFAULT_BIGCOMMERCE_TIMEOUT_SECONDS

    def __post_init__(self) -> None:
        if self.batch_limit <= 0:
            raise ValueError("batch_limit must be > 0")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

    def store_api_url(self, store_hash: str) -> str:
        """Base URL of the v3 API for one store."""
        return f"{self.api_base_url.rstrip('/')}/stores/{store_hash}/v3"

    @classmethod
    def from_env(cls) -> BigCommerceConfig:
        return cls(
            api_base_url=os.getenv("BIGCOMMERCE_API_BASE_URL", DEFAULT_BIGCOMMERCE_API_BASE_URL),
            client_id=os.getenv("BIGCOMMERCE_CLIENT_ID", ""),
            batch_limit=int(
                os.getenv("BIGCOMMERCE_BATCH_LIMIT", str(DEFAULT_BIGCOMMERCE_BATCH_LIMIT))
            ),
            timeout_seconds=float(
                os.getenv(
                    "BIGCOMMERCE_TIMEOUT_SECONDS", str(DEFAULT_BIGCOMMERCE_TIMEOUT_SECONDS)
                )
            ),
        )
