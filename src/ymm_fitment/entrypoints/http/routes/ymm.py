from fastapi import APIRouter, Depends, Query

from ymm_fitment.domain.errors import DomainError, ProductResolutionError
from ymm_fitment.entrypoints.http.dependencies import (
    get_available_makes_use_case,
    get_available_models_use_case,
    get_available_years_use_case,
    get_check_compatibility_use_case,
    get_search_compatible_products_use_case,
    get_store_health_use_case,
    get_widget_config_use_case,
)
from ymm_fitment.entrypoints.http.dtos.ymm import (
    CompatibilityCheckDTO,
    SearchResponseDTO,
    StoreHealthDTO,
    WidgetConfigDTO,
)
from ymm_fitment.entrypoints.http.error_responses import ErrorResponse, SearchErrorResponse
from ymm_fitment.entrypoints.http.mappers.ymm_mapper import YmmMapper
from ymm_fitment.use_cases.check_compatibility import CheckCompatibility
from ymm_fitment.use_cases.facet_queries import (
    GetAvailableMakes,
    GetAvailableModels,
    GetAvailableYears,
)
from ymm_fitment.use_cases.find_compatible_ranges import VehicleSelection
from ymm_fitment.use_cases.search_compatible_products import SearchCompatibleProducts
from ymm_fitment.use_cases.store_health import GetStoreHealth, GetWidgetConfig


router = APIRouter(prefix="/ymm/{store_hash}", tags=["Storefront"])


@router.get(
    "/years",
    response_model=list[int],
    summary="Available model years",
    description="""
    Every year between the earliest start and the latest end of the store's
    active vehicle ranges, newest first. Empty when the store has no ranges.
    """,
)
def get_years(
    store_hash: str,
    use_case: GetAvailableYears = Depends(get_available_years_use_case),
) -> list[int]:
    return use_case.execute(store_hash)


@router.get(
    "/makes",
    response_model=list[str],
    summary="Makes available for a year",
    description="Distinct makes of active ranges covering `year`, ascending. Empty without a year.",
)
def get_makes(
    store_hash: str,
    year: str | None = Query(default=None, examples=["2019"]),
    use_case: GetAvailableMakes = Depends(get_available_makes_use_case),
) -> list[str]:
    return use_case.execute(store_hash, YmmMapper.parse_year(year))


@router.get(
    "/models",
    response_model=list[str],
    summary="Models available for a year and make",
    description="Distinct models, ascending. Empty unless both `year` and `make` are given.",
)
def get_models(
    store_hash: str,
    year: str | None = Query(default=None, examples=["2019"]),
    make: str | None = Query(default=None, examples=["Ford"]),
    use_case: GetAvailableModels = Depends(get_available_models_use_case),
) -> list[str]:
    return use_case.execute(
        store_hash,
        YmmMapper.parse_year(year),
        make.strip() if make else None,
    )


@router.get(
    "/search",
    response_model=SearchResponseDTO,
    response_model_exclude_none=True,
    summary="Search compatible products",
    description="""
    Resolve a Year/Make/Model selection into compatible catalog products.

    ## Behaviour
    - Missing year, make or model returns `{"products": []}`
    - Products linked through several matching ranges appear once
    - Product details come from the store's catalog in batches; any failed
      batch fails the whole search

    ## Example
    ```
    GET /ymm/abc123/search?year=2019&make=Ford&model=F-150
    ```
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Store unknown or inactive"},
        500: {"model": SearchErrorResponse, "description": "Search failed"},
    },
)
def search_products(
    store_hash: str,
    year: str | None = Query(default=None),
    make: str | None = Query(default=None),
    model: str | None = Query(default=None),
    use_case: SearchCompatibleProducts = Depends(get_search_compatible_products_use_case),
) -> SearchResponseDTO:
    """Search endpoint following parse → execute → map → return pattern."""
    request = YmmMapper.to_search_request(store_hash, year, make, model)

    try:
        result = use_case.execute(request)
    except DomainError:
        raise
    except Exception as exc:
        # Anything unexpected still answers with the search failure body
        raise ProductResolutionError(str(exc) or type(exc).__name__) from exc

    return YmmMapper.to_search_response(result)


@router.get(
    "/check",
    response_model=CompatibilityCheckDTO,
    summary="Check one product against a vehicle",
    description="""
    Whether `product_id` fits the given Year/Make/Model, using the same
    matching rule as `/search`. All four query parameters are required.

    ## Example
    ```
    GET /ymm/abc123/check?product_id=112&year=2019&make=Ford&model=F-150
    ```
    """,
    responses={422: {"model": ErrorResponse, "description": "Missing or invalid parameter"}},
)
def check_compatibility(
    store_hash: str,
    product_id: str = Query(min_length=1, examples=["112"]),
    year: int = Query(examples=[2019]),
    make: str = Query(min_length=1, examples=["Ford"]),
    model: str = Query(min_length=1, examples=["F-150"]),
    use_case: CheckCompatibility = Depends(get_check_compatibility_use_case),
) -> CompatibilityCheckDTO:
    selection = VehicleSelection(year=year, make=make, model=model, store_hash=store_hash)
    return YmmMapper.to_compatibility_response(use_case.execute(product_id, selection))


@router.get(
    "/config",
    response_model=WidgetConfigDTO,
    summary="Widget display configuration",
    responses={404: {"model": ErrorResponse, "description": "Store not found"}},
)
def get_widget_config(
    store_hash: str,
    use_case: GetWidgetConfig = Depends(get_widget_config_use_case),
) -> WidgetConfigDTO:
    use_case.execute(store_hash)
    return WidgetConfigDTO()


@router.get(
    "/health",
    response_model=StoreHealthDTO,
    summary="Store health",
    responses={404: {"model": ErrorResponse, "description": "Store not found"}},
)
def get_store_health(
    store_hash: str,
    use_case: GetStoreHealth = Depends(get_store_health_use_case),
) -> StoreHealthDTO:
    return YmmMapper.to_health_response(use_case.execute(store_hash))
