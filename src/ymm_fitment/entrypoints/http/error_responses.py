"""Error bodies documented in the OpenAPI schema."""

from pydantic import BaseModel, ConfigDict


class ErrorDetail(BaseModel):
    """One failing field, used by validation errors."""

    field: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "field": "year_start",
                "message": "Must be less than or equal to year_end",
                "code": "INVALID_RANGE",
            }
        }
    )


class ErrorResponse(BaseModel):
    """Admin error body: ``detail`` and ``code``, plus ``errors`` per failing field."""

    detail: str
    code: str | None = None
    errors: list[ErrorDetail] | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"detail": "Store with identifier 'abc123' not found", "code": "NOT_FOUND"},
                {
                    "detail": "Validation failed",
                    "code": "VALIDATION_ERROR",
                    "errors": [
                        {
                            "field": "year_start",
                            "message": "Must be less than or equal to year_end",
                            "code": "INVALID_RANGE",
                        },
                    ],
                },
            ]
        }
    )


class SearchErrorResponse(BaseModel):
    """Failure body of the storefront search endpoint.

    The widget only reads ``error`` and ``message``; ``code`` is kept for logs.
    """

    error: str
    message: str
    code: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "error": "Failed to search products",
                "message": "Failed to fetch product details: API call failed: 503",
                "code": "PRODUCT_RESOLUTION_ERROR",
            }
        }
    )
