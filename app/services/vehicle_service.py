"""车辆服务：车主登记车辆，协调员掌握全部车辆的可用情况。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_OK
from app.core.enums import VehicleStatusEnum, VehicleTypeEnum
from app.core.guards import forbid_unless_owner_or_coordinator, is_coordinator
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.vehicles import vehicle_crud
from app.models.user import User
from app.models.vehicle import Vehicle


def serialize_vehicle(vehicle: Vehicle) -> dict:
    location = None
    if vehicle.location_lat is not None or vehicle.location_lng is not None or vehicle.location_address:
        location = {
            "address": vehicle.location_address,
            "lat": vehicle.location_lat,
            "lng": vehicle.location_lng,
        }
    return {
        "id": vehicle.id,
        "plate": vehicle.plate,
        "vehicle_type": vehicle.vehicle_type,
        "usage_purpose": vehicle.usage_purpose,
        "capacity": vehicle.capacity,
        "is_available": vehicle.is_available,
        "status": vehicle.status,
        "location": location,
        "organization_id": vehicle.organization_id,
        "owner_id": vehicle.owner_id,
        "create_time": format_datetime(vehicle.create_time),
        "update_time": format_datetime(vehicle.update_time),
    }


class VehicleService:
    def register(self, db: Session, *, payload: Dict[str, Any], current_user: User) -> dict:
        """车主只能为自己登记车辆；协调员可以代为登记并指定车主。"""
        data = dict(payload)
        if not is_coordinator(current_user) or data.get("owner_id") is None:
            data["owner_id"] = current_user.id
        if data.get("organization_id") is None:
            data["organization_id"] = current_user.organization_id
        vehicle = vehicle_crud.create(db, data)
        return create_response("登记车辆成功", serialize_vehicle(vehicle), HTTP_STATUS_OK)

    def list_mine(self, db: Session, *, current_user: User) -> dict:
        items = vehicle_crud.list_by_owner(db, current_user.id)
        return create_response("获取我的车辆成功", [serialize_vehicle(item) for item in items], HTTP_STATUS_OK)

    def list_vehicles(
        self,
        db: Session,
        *,
        vehicle_type: Optional[VehicleTypeEnum] = None,
        is_available: Optional[bool] = None,
        status: Optional[VehicleStatusEnum] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict:
        page = max(page, 1)
        page_size = max(page_size, 1)
        filters = {
            "vehicle_type": vehicle_type.value if vehicle_type else None,
            "is_available": is_available,
            "status": status.value if status else None,
        }
        items = vehicle_crud.get_multi(db, skip=(page - 1) * page_size, limit=page_size, filters=filters)
        payload = {
            "total": vehicle_crud.count(db, filters=filters),
            "items": [serialize_vehicle(item) for item in items],
            "page": page,
            "page_size": page_size,
        }
        return create_response("获取车辆列表成功", payload, HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, vehicle_id: int, current_user: User) -> dict:
        vehicle = self._get_managed(db, vehicle_id, current_user)
        return create_response("获取车辆详情成功", serialize_vehicle(vehicle), HTTP_STATUS_OK)

    def update(self, db: Session, *, vehicle_id: int, changes: Dict[str, Any], current_user: User) -> dict:
        vehicle = self._get_managed(db, vehicle_id, current_user)
        data = dict(changes)
        if not is_coordinator(current_user):
            # 车主不能把车辆转给他人
            data.pop("owner_id", None)
        vehicle = vehicle_crud.update(db, vehicle, data)
        return create_response("更新车辆成功", serialize_vehicle(vehicle), HTTP_STATUS_OK)

    def delete(self, db: Session, *, vehicle_id: int, current_user: User) -> dict:
        vehicle = self._get_managed(db, vehicle_id, current_user)
        vehicle_crud.soft_delete(db, vehicle)
        return create_response("删除车辆成功", {"id": vehicle_id}, HTTP_STATUS_OK)

    @staticmethod
    def _get_managed(db: Session, vehicle_id: int, current_user: User) -> Vehicle:
        vehicle = vehicle_crud.get_visible_or_404(db, vehicle_id)
        forbid_unless_owner_or_coordinator(current_user, vehicle.owner_id, message="无权操作他人的车辆")
        return vehicle


vehicle_service = VehicleService()
