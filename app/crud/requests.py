"""车辆需求 CRUD：需求主表与明细行的读写。"""

from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.crud.base import CRUDBase
from app.models.request import VehicleRequest, VehicleRequestItem
from app.validation.common import ShapeModel


def _item_signature(items) -> List[tuple]:
    return [(item.vehicle_type, item.count) for item in items]


class CRUDVehicleRequest(CRUDBase[VehicleRequest]):
    """明细行以 ``vehicles`` 列表的形式参与校验，落库时按顺序写入子表。"""

    not_found_message = "需求不存在或已删除"

    def list_by_requester(self, db: Session, requester_id: int) -> List[VehicleRequest]:
        return (
            self.query(db)
            .filter(VehicleRequest.requester_id == requester_id)
            .order_by(VehicleRequest.id.desc())
            .all()
        )

    def to_payload(self, db_obj: VehicleRequest) -> Dict[str, Any]:
        return {
            "title": db_obj.title,
            "description": db_obj.description,
            "requester_id": db_obj.requester_id,
            "requester_organization_id": db_obj.requester_organization_id,
            "vehicles": [{"vehicle_type": item.vehicle_type, "count": item.count} for item in db_obj.items],
            "location": {
                "address": db_obj.location_address,
                "lat": db_obj.location_lat,
                "lng": db_obj.location_lng,
            },
            "status": db_obj.status,
            "is_deleted": db_obj.is_deleted,
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        return {
            "title": shape.title,
            "description": shape.description,
            "requester_id": shape.requester_id,
            "requester_organization_id": shape.requester_organization_id,
            "items": [
                VehicleRequestItem(position=index, vehicle_type=item.vehicle_type, count=item.count)
                for index, item in enumerate(shape.vehicles)
            ],
            "location_address": shape.location.address,
            "location_lat": shape.location.lat,
            "location_lng": shape.location.lng,
            "status": shape.status,
            "is_deleted": shape.is_deleted,
        }

    def _assign(self, db_obj: VehicleRequest, key: str, value: Any) -> None:
        # 明细未变化时保留原有行，避免每次更新都重建子表
        if key == "items":
            if _item_signature(db_obj.items) != _item_signature(value):
                db_obj.items = value
            return
        super()._assign(db_obj, key, value)


vehicle_request_crud = CRUDVehicleRequest(VehicleRequest, EntityKind.REQUEST)
