"""车辆 CRUD：车辆登记、查询与可用状态维护。"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.crud.base import CRUDBase
from app.models.vehicle import Vehicle
from app.validation.common import ShapeModel


class CRUDVehicle(CRUDBase[Vehicle]):
    unique_fields = ("plate",)
    not_found_message = "车辆不存在或已删除"

    def list_by_owner(self, db: Session, owner_id: int) -> List[Vehicle]:
        return self.query(db).filter(Vehicle.owner_id == owner_id).order_by(Vehicle.id.asc()).all()

    def to_payload(self, db_obj: Vehicle) -> Dict[str, Any]:
        location = None
        if any(
            value is not None
            for value in (db_obj.location_address, db_obj.location_lat, db_obj.location_lng)
        ):
            location = {
                "address": db_obj.location_address,
                "lat": db_obj.location_lat,
                "lng": db_obj.location_lng,
            }
        return {
            "plate": db_obj.plate,
            "vehicle_type": db_obj.vehicle_type,
            "usage_purpose": db_obj.usage_purpose,
            "capacity": db_obj.capacity,
            "is_available": db_obj.is_available,
            "status": db_obj.status,
            "location": location,
            "organization_id": db_obj.organization_id,
            "owner_id": db_obj.owner_id,
            "is_deleted": db_obj.is_deleted,
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        location = shape.location
        return {
            "plate": shape.plate,
            "vehicle_type": shape.vehicle_type,
            "usage_purpose": shape.usage_purpose,
            "capacity": shape.capacity,
            "is_available": shape.is_available,
            "status": shape.status,
            "location_address": location.address if location else None,
            "location_lat": location.lat if location else None,
            "location_lng": location.lng if location else None,
            "organization_id": shape.organization_id,
            "owner_id": shape.owner_id,
            "is_deleted": shape.is_deleted,
        }


vehicle_crud = CRUDVehicle(Vehicle, EntityKind.VEHICLE)
