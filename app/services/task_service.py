"""任务服务：协调员把需求分派给车辆，车主与协调员推进任务状态。

状态变化附带的副作用：
- 创建任务：需求置为“已分派”，车辆置为不可用，并通知车主；
- 开始：记录 ``started_at``；
- 完成 / 取消：记录 ``finished_at`` 并释放车辆；需求下所有任务完成时需求随之完成。
"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_FORBIDDEN, HTTP_STATUS_OK
from app.core.enums import (
    NotificationTypeEnum,
    RequestStatusEnum,
    TaskStatusEnum,
    VehicleStatusEnum,
)
from app.core.exceptions import AppException
from app.core.guards import is_coordinator, is_vehicle_owner
from app.core.logger import logger
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.requests import vehicle_request_crud
from app.crud.tasks import task_crud
from app.crud.vehicles import vehicle_crud
from app.models.base import utcnow
from app.models.task import Task
from app.models.user import User
from app.services.notification_service import notification_service

_FINISHED_STATUSES = {TaskStatusEnum.COMPLETED.value, TaskStatusEnum.CANCELLED.value}


def serialize_task(task: Task) -> dict:
    return {
        "id": task.id,
        "request_id": task.request_id,
        "vehicle_id": task.vehicle_id,
        "coordinator_id": task.coordinator_id,
        "driver": {
            "name": task.driver_name,
            "surname": task.driver_surname,
            "phone": task.driver_phone,
        },
        "status": task.status,
        "note": task.note,
        "target_location": {"lat": task.target_lat, "lng": task.target_lng},
        "started_at": format_datetime(task.started_at),
        "finished_at": format_datetime(task.finished_at),
        "create_time": format_datetime(task.create_time),
        "update_time": format_datetime(task.update_time),
    }


class TaskService:
    def assign(self, db: Session, *, payload: Dict[str, Any], coordinator: User) -> dict:
        request = vehicle_request_crud.get_visible_or_404(db, payload.get("request_id"))
        vehicle = vehicle_crud.get_visible_or_404(db, payload.get("vehicle_id"))
        if request.status in (RequestStatusEnum.COMPLETED.value, RequestStatusEnum.CANCELLED.value):
            raise AppException("需求已完成或已撤销，无法分派", HTTP_STATUS_BAD_REQUEST)
        if not vehicle.is_available or vehicle.status != VehicleStatusEnum.ACTIVE.value:
            raise AppException("车辆当前不可用", HTTP_STATUS_BAD_REQUEST)

        data = dict(payload)
        data["coordinator_id"] = coordinator.id
        data.pop("status", None)
        task = task_crud.create(db, data, auto_commit=False)

        vehicle_request_crud.update(db, request, {"status": RequestStatusEnum.ASSIGNED.value}, auto_commit=False)
        vehicle_crud.update(db, vehicle, {"is_available": False}, auto_commit=False)
        notification_service.notify_user(
            db,
            user_id=vehicle.owner_id,
            title="新的运输任务",
            content=f"车辆 {vehicle.plate} 已被分派到需求「{request.title}」",
            notification_type=NotificationTypeEnum.TASK,
            target_url=f"/tasks/{task.id}",
        )
        db.commit()
        db.refresh(task)
        logger.info("Task #%s assigned: request #%s -> vehicle #%s", task.id, request.id, vehicle.id)
        return create_response("分派任务成功", serialize_task(task), HTTP_STATUS_OK)

    def list_tasks(
        self,
        db: Session,
        *,
        current_user: User,
        request_id: Optional[int] = None,
        status: Optional[TaskStatusEnum] = None,
    ) -> dict:
        """协调员查看全部任务，车主只能看到自己车辆上的任务。"""
        if is_coordinator(current_user):
            filters = {"request_id": request_id, "status": status.value if status else None}
            items = task_crud.get_multi(db, limit=1000, filters=filters)
        elif is_vehicle_owner(current_user):
            vehicle_ids = [vehicle.id for vehicle in vehicle_crud.list_by_owner(db, current_user.id)]
            items = task_crud.list_by_vehicles(db, vehicle_ids)
            if request_id is not None:
                items = [item for item in items if item.request_id == request_id]
            if status is not None:
                items = [item for item in items if item.status == status.value]
        else:
            raise AppException("无权查看任务", HTTP_STATUS_FORBIDDEN)
        return create_response("获取任务列表成功", [serialize_task(item) for item in items], HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, task_id: int, current_user: User) -> dict:
        task = self._get_managed(db, task_id, current_user)
        return create_response("获取任务详情成功", serialize_task(task), HTTP_STATUS_OK)

    def change_status(
        self,
        db: Session,
        *,
        task_id: int,
        status: TaskStatusEnum,
        note: Optional[str] = None,
        current_user: User,
    ) -> dict:
        task = self._get_managed(db, task_id, current_user)
        previous = task.status
        changes: Dict[str, Any] = {"status": status.value}
        if note is not None:
            changes["note"] = note
        if status == TaskStatusEnum.STARTED and task.started_at is None:
            changes["started_at"] = utcnow()
        if status.value in _FINISHED_STATUSES and task.finished_at is None:
            changes["finished_at"] = utcnow()
        task = task_crud.update(db, task, changes, auto_commit=False)

        if status.value in _FINISHED_STATUSES:
            self._release_vehicle(db, task)
        if status == TaskStatusEnum.COMPLETED:
            self._complete_request_if_done(db, task)
        if previous != task.status and task.coordinator_id != current_user.id:
            notification_service.notify_user(
                db,
                user_id=task.coordinator_id,
                title="任务状态已更新",
                content=f"任务 #{task.id} 状态：{previous} -> {task.status}",
                notification_type=NotificationTypeEnum.TASK,
                target_url=f"/tasks/{task.id}",
            )
        db.commit()
        db.refresh(task)
        logger.info("Task #%s status %s -> %s by #%s", task.id, previous, task.status, current_user.id)
        return create_response("更新任务状态成功", serialize_task(task), HTTP_STATUS_OK)

    def cancel_open_tasks(self, db: Session, request_id: int) -> int:
        """需求撤销或删除时取消其下未结束的任务并释放车辆，不提交事务。"""
        cancelled = 0
        for task in task_crud.list_by_request(db, request_id):
            if task.status in _FINISHED_STATUSES:
                continue
            task_crud.update(
                db,
                task,
                {"status": TaskStatusEnum.CANCELLED.value, "finished_at": utcnow()},
                auto_commit=False,
            )
            self._release_vehicle(db, task)
            cancelled += 1
        if cancelled:
            logger.info("Cancelled %s open task(s) of request #%s", cancelled, request_id)
        return cancelled

    @staticmethod
    def _release_vehicle(db: Session, task: Task) -> None:
        vehicle = vehicle_crud.get(db, task.vehicle_id)
        if vehicle is not None and not vehicle.is_available:
            vehicle_crud.update(db, vehicle, {"is_available": True}, auto_commit=False)

    @staticmethod
    def _complete_request_if_done(db: Session, task: Task) -> None:
        request = vehicle_request_crud.get(db, task.request_id)
        if request is None or request.status == RequestStatusEnum.COMPLETED.value:
            return
        tasks = task_crud.list_by_request(db, request.id)
        if tasks and all(item.status == TaskStatusEnum.COMPLETED.value for item in tasks):
            vehicle_request_crud.update(db, request, {"status": RequestStatusEnum.COMPLETED.value}, auto_commit=False)
            logger.info("Request #%s completed: all tasks finished", request.id)

    @staticmethod
    def _get_managed(db: Session, task_id: int, current_user: User) -> Task:
        task = task_crud.get_visible_or_404(db, task_id)
        if is_coordinator(current_user):
            return task
        vehicle = vehicle_crud.get(db, task.vehicle_id)
        if vehicle is None or vehicle.owner_id != current_user.id:
            raise AppException("无权操作该任务", HTTP_STATUS_FORBIDDEN)
        return task


task_service = TaskService()
