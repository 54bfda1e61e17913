from __future__ import annotations

from ymm_fitment.domain.product import ProductDetail
from ymm_fitment.entrypoints.http.dtos.ymm import (
    CompatibilityCheckDTO,
    ProductDTO,
    ProductImageDTO,
    SearchResponseDTO,
    StoreHealthDTO,
    VehicleInfoDTO,
)
from ymm_fitment.use_cases.check_compatibility import CompatibilityCheck
from ymm_fitment.use_cases.search_compatible_products import (
    SearchCompatibleProductsRequest,
    SearchCompatibleProductsResponse,
)
from ymm_fitment.use_cases.store_health import StoreHealth


class YmmMapper:
    """Maps between storefront query strings, domain results and widget DTOs."""

    @staticmethod
    def parse_year(raw: str | None) -> int | None:
        """
        Lenient year parsing for storefront queries.

        Anything that is not an integer counts as "not selected", so the
        endpoint degrades to an empty result instead of failing.
        """
        if raw is None:
            return None
        try:
            return int(raw.strip())
        except ValueError:
            return None

    @staticmethod
    def to_search_request(
        store_hash: str,
        year: str | None,
        make: str | None,
        model: str | None,
    ) -> SearchCompatibleProductsRequest:
        return SearchCompatibleProductsRequest(
            store_hash=store_hash,
            year=YmmMapper.parse_year(year),
            make=make.strip() if make else None,
            model=model.strip() if model else None,
        )

    @staticmethod
    def to_product_response(product: ProductDetail) -> ProductDTO:
        """Decimal price → str at the boundary."""
        return ProductDTO(
            id=product.id,
            name=product.name,
            price=str(product.price),
            sku=product.sku,
            images=[
                ProductImageDTO(
                    url_standard=image.url_standard,
                    url_thumbnail=image.url_thumbnail,
                    description=image.description,
                    is_thumbnail=image.is_thumbnail,
                )
                for image in product.images
            ],
            custom_url=product.custom_url,
            description=product.description,
        )

    @staticmethod
    def to_search_response(result: SearchCompatibleProductsResponse) -> SearchResponseDTO:
        if result.selection is None:
            return SearchResponseDTO(products=[])

        return SearchResponseDTO(
            products=[YmmMapper.to_product_response(p) for p in result.products],
            total=result.total,
            vehicle_info=VehicleInfoDTO(
                year=result.selection.year,
                make=result.selection.make,
                model=result.selection.model,
            ),
        )

    @staticmethod
    def to_health_response(health: StoreHealth) -> StoreHealthDTO:
        return StoreHealthDTO(
            status=health.status,
            store_active=health.store_active,
            vehicle_count=health.vehicle_count,
            compatibility_count=health.compatibility_count,
            timestamp=health.timestamp.isoformat(),
        )

    @staticmethod
    def to_compatibility_response(check: CompatibilityCheck) -> CompatibilityCheckDTO:
        return CompatibilityCheckDTO(
            compatible=check.compatible,
            product_id=check.product_id,
            vehicle=VehicleInfoDTO(
                year=check.selection.year,
                make=check.selection.make,
                model=check.selection.model,
            ),
        )
