from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ymm_fitment.entrypoints.http.dependencies import close_product_detail_gateway
from ymm_fitment.entrypoints.http.exception_handlers import register_exception_handlers
from ymm_fitment.entrypoints.http.routes.health import router as health_router
from ymm_fitment.entrypoints.http.routes.products import router as products_router
from ymm_fitment.entrypoints.http.routes.vehicles import router as vehicles_router
from ymm_fitment.entrypoints.http.routes.ymm import router as ymm_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """The catalog gateway lives for the whole process; its client is closed on shutdown."""
    yield
    close_product_detail_gateway()


def build_app() -> FastAPI:
    app = FastAPI(
        title="YMM Fitment API",
        description="""
        Vehicle compatibility engine for a storefront Year/Make/Model filter.

        ## Features
        - Cascading year, make and model options for the storefront widget
        - Compatible product search enriched from the store's catalog
        - Single product compatibility check
        - Vehicle range administration and bulk import
        - Product to vehicle association management

        ## Authentication
        Store installation and OAuth are handled outside this service.

        ## Error Handling
        All errors return structured JSON responses with error codes.
        The storefront search answers failures with `{error, message}`.
        """,
        version="0.1.0",
        docs_url="/docs",  # Swagger UI
        redoc_url="/redoc",  # ReDoc alternative
        openapi_url="/openapi.json",  # OpenAPI schema
        lifespan=lifespan,
        license_info={
            "name": "Proprietary",
        },
    )

    # Register global exception handlers
    register_exception_handlers(app)

    # Register routers
    app.include_router(health_router)
    app.include_router(ymm_router)
    app.include_router(vehicles_router)
    app.include_router(products_router)

    return app


app = build_app()
