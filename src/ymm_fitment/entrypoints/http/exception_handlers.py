"""FastAPI exception handlers.

Admin endpoints answer failures with ``{detail, code, errors?}``. The storefront
search answers with ``{error, message}`` so the widget can show the message as is.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ymm_fitment.domain.errors import DomainError, ProductResolutionError

logger = logging.getLogger(__name__)

SEARCH_FAILURE_TITLE = "Failed to search products"

# Domain error code → HTTP status. Codes not listed map to 400.
DOMAIN_STATUS_CODES: dict[str, int] = {
    "VALIDATION_ERROR": 422,  # HTTP_422_UNPROCESSABLE_CONTENT
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "UPSTREAM_GATEWAY_ERROR": status.HTTP_502_BAD_GATEWAY,
    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _request_context(request: Request) -> dict[str, str]:
    return {"path": request.url.path, "method": request.method}


def status_for(exc: DomainError) -> int:
    return DOMAIN_STATUS_CODES.get(exc.error_code, status.HTTP_400_BAD_REQUEST)


async def handle_domain_error(request: Request, exc: DomainError) -> JSONResponse:
    """Translate any DomainError using its ``error_code``.

    Server-side failures (5xx) are logged at ERROR with the error context;
    client errors only at INFO.
    """
    status_code = status_for(exc)
    payload = exc.to_dict()

    log_extra = {
        "error_code": exc.error_code,
        "error_message": exc.message,
        **_request_context(request),
    }
    if status_code >= 500:
        logger.error("Domain error occurred", extra={**log_extra, "context": exc.context})
    else:
        logger.info("Client error", extra=log_extra)

    body: dict[str, Any] = {"detail": payload["message"], "code": payload["code"]}
    if "errors" in payload:
        body["errors"] = payload["errors"]

    return JSONResponse(status_code=status_code, content=body)


async def handle_product_resolution_error(
    request: Request, exc: ProductResolutionError
) -> JSONResponse:
    """Failed compatible-product search: 500 with the storefront error body."""
    logger.error(
        "Product search failed",
        exc_info=exc,
        extra={
            "error_code": exc.error_code,
            "error_message": exc.message,
            "context": exc.context,
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": SEARCH_FAILURE_TITLE,
            "message": exc.message,
            "code": exc.error_code,
        },
    )


def _field_errors(exc: RequestValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors, dropping the ``body``/``query`` location prefix."""
    return [
        {
            "field": ".".join(str(part) for part in error["loc"] if part not in ("body", "query")),
            "message": error["msg"],
            "code": error["type"],
        }
        for error in exc.errors()
    ]


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request shape errors caught by FastAPI before a route runs.

    Examples:
        - limit=500 on GET /vehicles (max is 200)
        - year_start="abc" in a vehicle payload
        - vehicle_ids missing from an association request
    """
    errors = _field_errors(exc)
    logger.info(
        "Request validation error",
        extra={"errors": errors, **_request_context(request)},
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={
            "detail": "Invalid request parameters",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


async def handle_value_error(request: Request, exc: ValueError) -> JSONResponse:
    logger.info(
        "Value error",
        extra={"error_message": str(exc), **_request_context(request)},
    )

    return JSONResponse(
        status_code=422,  # HTTP_422_UNPROCESSABLE_CONTENT
        content={"detail": str(exc), "code": "INVALID_VALUE"},
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    """Last resort. The traceback is logged; the client gets a generic body."""
    logger.error(
        "Unexpected error occurred",
        exc_info=exc,
        extra={
            "error_type": type(exc).__name__,
            "error_message": str(exc),
            **_request_context(request),
        },
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred", "code": "INTERNAL_ERROR"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every handler to the app.

    Starlette picks the handler registered for the closest class in the
    exception's MRO, so ProductResolutionError overrides the DomainError one.
    """
    handlers: list[tuple[type[Exception], Any]] = [
        (DomainError, handle_domain_error),
        (ProductResolutionError, handle_product_resolution_error),
        (RequestValidationError, handle_request_validation_error),
        (ValueError, handle_value_error),
        (Exception, handle_unexpected_error),
    ]
    for exc_class, handler in handlers:
        app.add_exception_handler(exc_class, handler)

    logger.info("Exception handlers registered", extra={"count": len(handlers)})
