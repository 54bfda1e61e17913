from ymm_fitment.infra.db.models.base import Base
from ymm_fitment.infra.db.models.product_vehicle import ProductVehicleRow
from ymm_fitment.infra.db.models.store import StoreRow
from ymm_fitment.infra.db.models.vehicle import VehicleRow

__all__ = ["Base", "ProductVehicleRow", "StoreRow", "VehicleRow"]
