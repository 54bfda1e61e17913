from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class VehicleResponseDTO(BaseModel):
    id: str
    make: str
    model: str
    year_start: int
    year_end: int
    is_active: bool
    store_hash: str | None = None


class VehicleRequestDTO(BaseModel):
    """Payload for creating or replacing a vehicle range."""

    make: str = Field(min_length=1, max_length=255, examples=["Ford"])
    model: str = Field(min_length=1, max_length=255, examples=["F-150"])
    year_start: int = Field(description="First model year (inclusive)", examples=[2015])
    year_end: int = Field(description="Last model year (inclusive)", examples=[2020])
    is_active: bool = True
    store_hash: str | None = Field(
        default=None,
        max_length=64,
        description="Owning store; omit to keep the current scope on update",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "make": "Ford",
                "model": "F-150",
                "year_start": 2015,
                "year_end": 2020,
                "is_active": True,
                "store_hash": "abc123",
            }
        }
    )


class VehicleListQueryDTO(BaseModel):
    """Query parameters for listing vehicle ranges."""

    store_hash: str | None = Field(default=None, description="Restrict to one store")
    search: str | None = Field(
        default=None,
        description="Case-insensitive substring match on make or model",
        examples=["silverado"],
    )
    offset: int = Field(default=0, ge=0)
    limit: int = Field(default=20, ge=1, le=200)


class VehicleListResponseDTO(BaseModel):
    vehicles: list[VehicleResponseDTO]
    total: int
    offset: int
    limit: int


class VehicleDeletedDTO(BaseModel):
    message: str
    removed_links: int


class BulkImportRequestDTO(BaseModel):
    """Rows as JSON objects, or the same data as CSV text with a header line.

    Rows stay loosely typed on purpose: each one is validated on its own so a
    malformed row is reported instead of rejecting the whole request.
    """

    rows: list[Any] | None = None
    csv_data: str | None = None
    store_hash: str | None = Field(default=None, max_length=64)

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "store_hash": "abc123",
                    "rows": [
                        {"make": "Ford", "model": "F-150", "year_start": 2015, "year_end": 2020}
                    ],
                },
                {"csv_data": "year_start,year_end,make,model\n2015,2020,Ford,F-150"},
            ]
        }
    )


class ImportRowResultDTO(BaseModel):
    row: int
    status: Literal["imported", "failed"]
    vehicle_id: str | None = None
    product_id: str | None = None
    created: bool | None = None
    message: str | None = None


class ImportReportDTO(BaseModel):
    message: str
    imported: int
    failed: int
    results: list[ImportRowResultDTO]
    errors: list[str] = Field(description="One line per failed row")
