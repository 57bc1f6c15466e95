"""任务 CRUD：任务的分派记录与状态读写。"""

from typing import Any, Dict, Iterable, List

from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.crud.base import CRUDBase
from app.models.task import Task
from app.validation.common import ShapeModel


class CRUDTask(CRUDBase[Task]):
    not_found_message = "任务不存在或已删除"

    def list_by_request(self, db: Session, request_id: int) -> List[Task]:
        return self.query(db).filter(Task.request_id == request_id).order_by(Task.id.asc()).all()

    def list_by_vehicles(self, db: Session, vehicle_ids: Iterable[int]) -> List[Task]:
        ids = list(vehicle_ids)
        if not ids:
            return []
        return self.query(db).filter(Task.vehicle_id.in_(ids)).order_by(Task.id.desc()).all()

    def to_payload(self, db_obj: Task) -> Dict[str, Any]:
        return {
            "request_id": db_obj.request_id,
            "vehicle_id": db_obj.vehicle_id,
            "coordinator_id": db_obj.coordinator_id,
            "driver": {
                "name": db_obj.driver_name,
                "surname": db_obj.driver_surname,
                "phone": db_obj.driver_phone,
            },
            "status": db_obj.status,
            "note": db_obj.note,
            "target_location": {"lat": db_obj.target_lat, "lng": db_obj.target_lng},
            "started_at": db_obj.started_at,
            "finished_at": db_obj.finished_at,
            "is_deleted": db_obj.is_deleted,
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        return {
            "request_id": shape.request_id,
            "vehicle_id": shape.vehicle_id,
            "coordinator_id": shape.coordinator_id,
            "driver_name": shape.driver.name,
            "driver_surname": shape.driver.surname,
            "driver_phone": shape.driver.phone,
            "status": shape.status,
            "note": shape.note,
            "target_lat": shape.target_location.lat,
            "target_lng": shape.target_location.lng,
            "started_at": shape.started_at,
            "finished_at": shape.finished_at,
            "is_deleted": shape.is_deleted,
        }


task_crud = CRUDTask(Task, EntityKind.TASK)
