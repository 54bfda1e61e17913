from pydantic import BaseModel, ConfigDict, Field


class ProductImageDTO(BaseModel):
    url_standard: str
    url_thumbnail: str
    description: str
    is_thumbnail: bool


class ProductDTO(BaseModel):
    id: str
    name: str
    price: str = Field(description="Price as decimal string", examples=["129.99"])
    sku: str
    images: list[ProductImageDTO]
    custom_url: str | None = None
    description: str = Field(description="Plain text, HTML tags stripped")


class VehicleInfoDTO(BaseModel):
    year: int
    make: str
    model: str


class SearchResponseDTO(BaseModel):
    """Compatible products for a vehicle.

    An incomplete selection yields only ``{"products": []}``.
    """

    products: list[ProductDTO]
    total: int | None = None
    vehicle_info: VehicleInfoDTO | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "products": [
                    {
                        "id": "112",
                        "name": "Leveling Kit",
                        "price": "189.00",
                        "sku": "LK-F150",
                        "images": [],
                        "custom_url": "/leveling-kit/",
                        "description": "2 inch front leveling kit",
                    }
                ],
                "total": 1,
                "vehicle_info": {"year": 2019, "make": "Ford", "model": "F-150"},
            }
        }
    )


class WidgetConfigDTO(BaseModel):
    """Static display configuration consumed by the storefront widget."""

    title: str = "Vehicle Compatibility Filter"
    theme: str = "default"
    show_images: bool = True
    button_text: str = "Search Compatible Products"
    placeholder_year: str = "Select Year"
    placeholder_make: str = "Select Make"
    placeholder_model: str = "Select Model"
    primary_color: str = "#3B82F6"
    button_color: str = "#1D4ED8"


class StoreHealthDTO(BaseModel):
    status: str
    store_active: bool
    vehicle_count: int
    compatibility_count: int
    timestamp: str = Field(description="ISO-8601 UTC timestamp")


class CompatibilityCheckDTO(BaseModel):
    compatible: bool
    product_id: str
    vehicle: VehicleInfoDTO

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "compatible": True,
                "product_id": "112",
                "vehicle": {"year": 2019, "make": "Ford", "model": "F-150"},
            }
        }
    )
