"""
Dependency injection for FastAPI routes.

Key principle: Database sessions should be per-request, not cached.
Only stateless singletons (the catalog gateway and its HTTP connection
pool) use lru_cache.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from ymm_fitment.adapters.bigcommerce_product_gateway import BigCommerceProductGateway
from ymm_fitment.adapters.postgres_product_vehicle_repository import (
    PostgresProductVehicleRepository,
)
from ymm_fitment.adapters.postgres_store_repository import PostgresStoreRepository
from ymm_fitment.adapters.postgres_vehicle_catalog_repository import (
    PostgresVehicleCatalogRepository,
)
from ymm_fitment.infra.config import BigCommerceConfig
from ymm_fitment.infra.db.session import get_session
from ymm_fitment.ports.product_detail_gateway import ProductDetailGateway
from ymm_fitment.ports.product_vehicle_repository import ProductVehicleRepository
from ymm_fitment.ports.store_repository import StoreRepository
from ymm_fitment.ports.vehicle_catalog_repository import VehicleCatalogRepository
from ymm_fitment.use_cases.bulk_import import ImportProductAssociations, ImportVehicleRanges
from ymm_fitment.use_cases.check_compatibility import CheckCompatibility
from ymm_fitment.use_cases.facet_queries import (
    GetAvailableMakes,
    GetAvailableModels,
    GetAvailableYears,
)
from ymm_fitment.use_cases.fetch_product_details import FetchProductDetails
from ymm_fitment.use_cases.manage_associations import (
    AssociateVehicles,
    DissociateVehicle,
    ExportAssociations,
    GetProductVehicles,
    GetVehicleProducts,
)
from ymm_fitment.use_cases.manage_vehicle_ranges import (
    CreateVehicleRange,
    DeleteVehicleRange,
    GetVehicleRange,
    ListVehicleRanges,
    UpdateVehicleRange,
)
from ymm_fitment.use_cases.resolve_compatible_products import ResolveCompatibleProducts
from ymm_fitment.use_cases.search_compatible_products import SearchCompatibleProducts
from ymm_fitment.use_cases.store_health import GetStoreHealth, GetWidgetConfig


def get_db() -> Generator[Session, None, None]:
    """
    Provides a database session for a single request.

    The underlying get_session() commits when the request succeeds,
    rolls back when it raises, and always closes the session.

    Yields:
        Session: SQLAlchemy database session (per-request)
    """
    with get_session() as session:
        yield session


# ==============================================================================
# Adapters
# ==============================================================================


def get_vehicle_repository(db: Session = Depends(get_db)) -> VehicleCatalogRepository:
    return PostgresVehicleCatalogRepository(session=db)


def get_product_vehicle_repository(db: Session = Depends(get_db)) -> ProductVehicleRepository:
    return PostgresProductVehicleRepository(session=db)


def get_store_repository(db: Session = Depends(get_db)) -> StoreRepository:
    return PostgresStoreRepository(session=db)


@lru_cache
def get_product_detail_gateway() -> ProductDetailGateway:
    """
    Process-wide catalog gateway.

    Configuration is read from the environment once and passed into the
    constructor; the gateway holds no per-request state.
    """
    return BigCommerceProductGateway(config=BigCommerceConfig.from_env())


def close_product_detail_gateway() -> None:
    """Close the cached gateway's HTTP client, if one was created, and forget it."""
    if get_product_detail_gateway.cache_info().currsize:
        get_product_detail_gateway().close()
        get_product_detail_gateway.cache_clear()


# ==============================================================================
# Storefront (YMM widget) use cases
# ==============================================================================


def get_available_years_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> GetAvailableYears:
    return GetAvailableYears(vehicles)


def get_available_makes_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> GetAvailableMakes:
    return GetAvailableMakes(vehicles)


def get_available_models_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> GetAvailableModels:
    return GetAvailableModels(vehicles)


def get_search_compatible_products_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
    stores: StoreRepository = Depends(get_store_repository),
    gateway: ProductDetailGateway = Depends(get_product_detail_gateway),
) -> SearchCompatibleProducts:
    """
    Factory for the search use case.

    Called per-request: fresh repositories over the request's session,
    shared gateway.
    """
    return SearchCompatibleProducts(
        resolver=ResolveCompatibleProducts(vehicles, links),
        fetch_details=FetchProductDetails(gateway),
        store_repository=stores,
    )


def get_check_compatibility_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> CheckCompatibility:
    return CheckCompatibility(resolver=ResolveCompatibleProducts(vehicles, links))


def get_store_health_use_case(
    stores: StoreRepository = Depends(get_store_repository),
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> GetStoreHealth:
    return GetStoreHealth(stores, vehicles, links)


def get_widget_config_use_case(
    stores: StoreRepository = Depends(get_store_repository),
) -> GetWidgetConfig:
    return GetWidgetConfig(stores)


# ==============================================================================
# Admin use cases
# ==============================================================================


def get_create_vehicle_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> CreateVehicleRange:
    return CreateVehicleRange(vehicles)


def get_get_vehicle_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> GetVehicleRange:
    return GetVehicleRange(vehicles)


def get_update_vehicle_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> UpdateVehicleRange:
    return UpdateVehicleRange(vehicles)


def get_delete_vehicle_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> DeleteVehicleRange:
    return DeleteVehicleRange(vehicles, links)


def get_list_vehicles_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> ListVehicleRanges:
    return ListVehicleRanges(vehicles)


def get_import_vehicles_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
) -> ImportVehicleRanges:
    return ImportVehicleRanges(vehicles)


def get_associate_vehicles_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> AssociateVehicles:
    return AssociateVehicles(vehicles, links)


def get_dissociate_vehicle_use_case(
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> DissociateVehicle:
    return DissociateVehicle(links)


def get_product_vehicles_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> GetProductVehicles:
    return GetProductVehicles(vehicles, links)


def get_vehicle_products_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> GetVehicleProducts:
    return GetVehicleProducts(vehicles, links)


def get_import_associations_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> ImportProductAssociations:
    return ImportProductAssociations(vehicles, links)


def get_export_associations_use_case(
    vehicles: VehicleCatalogRepository = Depends(get_vehicle_repository),
    links: ProductVehicleRepository = Depends(get_product_vehicle_repository),
) -> ExportAssociations:
    return ExportAssociations(vehicles, links)
