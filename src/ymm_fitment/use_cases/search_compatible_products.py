"""Search compatible products use case (the storefront search endpoint)."""

from __future__ import annotations

from dataclasses import dataclass, field

from ymm_fitment.domain.errors import NotFoundError
from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.ports.store_repository import StoreRepository
from ymm_fitment.use_cases.fetch_product_details import FetchProductDetails
from ymm_fitment.use_cases.find_compatible_ranges import VehicleSelection
from ymm_fitment.use_cases.resolve_compatible_products import ResolveCompatibleProducts


@dataclass(frozen=True, slots=True)
class SearchCompatibleProductsRequest:
    """Raw storefront query; any of year/make/model may be missing."""

    store_hash: str
    year: int | None = None
    make: str | None = None
    model: str | None = None

    def selection(self) -> VehicleSelection | None:
        """The complete selection, or None if any axis is missing or blank."""
        if self.year is None or not self.make or not self.model:
            return None
        return VehicleSelection(
            year=self.year,
            make=self.make,
            model=self.model,
            store_hash=self.store_hash,
        )


@dataclass(frozen=True, slots=True)
class SearchCompatibleProductsResponse:
    products: list[ProductDetail] = field(default_factory=list)
    selection: VehicleSelection | None = None  # None when the query was incomplete

    @property
    def total(self) -> int:
        return len(self.products)


class SearchCompatibleProducts:
    """
    Use case for the storefront "find parts for my vehicle" search.

    Responsibilities:
    - Degrade to an empty result when the selection is incomplete
    - Resolve the selection to distinct product ids
    - Skip the catalog entirely when nothing is linked
    - Enrich ids into display data (all-or-nothing across batches)
    """

    def __init__(
        self,
        resolver: ResolveCompatibleProducts,
        fetch_details: FetchProductDetails,
        store_repository: StoreRepository,
    ) -> None:
        self._resolver = resolver
        self._fetch_details = fetch_details
        self._store_repository = store_repository

    def execute(self, request: SearchCompatibleProductsRequest) -> SearchCompatibleProductsResponse:
        """
        Raises:
            NotFoundError: If products resolved but the store is unknown or inactive
            ProductResolutionError: If any catalog batch fails
        """
        selection = request.selection()
        if selection is None:
            return SearchCompatibleProductsResponse()

        resolved = self._resolver.execute(selection)
        if not resolved.product_ids:
            return SearchCompatibleProductsResponse(selection=selection)

        store = self._store_repository.get_by_hash(request.store_hash)
        if store is None or not store.is_active:
            raise NotFoundError(resource="Store", identifier=request.store_hash)

        products = self._fetch_details.execute(store, resolved.product_ids)
        return SearchCompatibleProductsResponse(products=products, selection=selection)
