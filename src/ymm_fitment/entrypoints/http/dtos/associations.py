from pydantic import BaseModel, Field


class AssociateVehiclesRequestDTO(BaseModel):
    vehicle_ids: list[str] = Field(min_length=1, description="Vehicle range ids to link")


class AssociateVehiclesResponseDTO(BaseModel):
    message: str
    product_id: str
    created: int
    already_linked: int


class DissociateVehicleResponseDTO(BaseModel):
    message: str
    removed: bool = Field(description="False when the link did not exist (still a success)")


class AssociationExportRowDTO(BaseModel):
    product_id: str
    vehicle_id: str
    make: str
    model: str
    year_start: int
    year_end: int
    is_active: bool


class AssociationExportDTO(BaseModel):
    associations: list[AssociationExportRowDTO]
    total: int


class VehicleProductsDTO(BaseModel):
    vehicle_id: str
    product_ids: list[str]
    total: int
