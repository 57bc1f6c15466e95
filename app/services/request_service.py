"""车辆需求服务：需求方提交、撤销需求，协调员查看与变更状态。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_OK
from app.core.enums import NotificationTypeEnum, RequestStatusEnum
from app.core.exceptions import AppException
from app.core.guards import forbid_unless_owner_or_coordinator
from app.core.logger import logger
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.requests import vehicle_request_crud
from app.crud.tasks import task_crud
from app.models.request import VehicleRequest
from app.models.user import User
from app.services.notification_service import notification_service
from app.services.task_service import task_service

_CLOSED_STATUSES = {RequestStatusEnum.COMPLETED.value, RequestStatusEnum.CANCELLED.value}


def serialize_request(request: VehicleRequest, *, with_tasks: bool = False, db: Optional[Session] = None) -> dict:
    data = {
        "id": request.id,
        "title": request.title,
        "description": request.description,
        "requester_id": request.requester_id,
        "requester_organization_id": request.requester_organization_id,
        "vehicles": [{"vehicle_type": item.vehicle_type, "count": item.count} for item in request.items],
        "location": {
            "address": request.location_address,
            "lat": request.location_lat,
            "lng": request.location_lng,
        },
        "status": request.status,
        "create_time": format_datetime(request.create_time),
        "update_time": format_datetime(request.update_time),
    }
    if with_tasks and db is not None:
        data["tasks"] = [
            {"id": task.id, "vehicle_id": task.vehicle_id, "status": task.status}
            for task in task_crud.list_by_request(db, request.id)
        ]
    return data


class RequestService:
    def create(self, db: Session, *, payload: Dict[str, Any], current_user: User) -> dict:
        data = dict(payload)
        data["requester_id"] = current_user.id
        if data.get("requester_organization_id") is None and current_user.organization_id is not None:
            data["requester_organization_id"] = current_user.organization_id
        # 新需求总是从待处理开始
        data.pop("status", None)
        request = vehicle_request_crud.create(db, data)
        logger.info("Request #%s submitted by user #%s", request.id, current_user.id)
        return create_response("提交需求成功", serialize_request(request), HTTP_STATUS_OK)

    def list_mine(self, db: Session, *, current_user: User) -> dict:
        items = vehicle_request_crud.list_by_requester(db, current_user.id)
        return create_response("获取我的需求成功", [serialize_request(item) for item in items], HTTP_STATUS_OK)

    def list_requests(
        self,
        db: Session,
        *,
        status: Optional[RequestStatusEnum] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict:
        page = max(page, 1)
        page_size = max(page_size, 1)
        filters = {"status": status.value if status else None}
        items = vehicle_request_crud.get_multi(db, skip=(page - 1) * page_size, limit=page_size, filters=filters)
        payload = {
            "total": vehicle_request_crud.count(db, filters=filters),
            "items": [serialize_request(item) for item in items],
            "page": page,
            "page_size": page_size,
        }
        return create_response("获取需求列表成功", payload, HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, request_id: int, current_user: User) -> dict:
        request = vehicle_request_crud.get_visible_or_404(db, request_id)
        forbid_unless_owner_or_coordinator(current_user, request.requester_id, message="无权查看他人的需求")
        return create_response("获取需求详情成功", serialize_request(request, with_tasks=True, db=db), HTTP_STATUS_OK)

    def change_status(self, db: Session, *, request_id: int, status: RequestStatusEnum, operator: User) -> dict:
        """协调员变更需求状态；状态之间不设迁移限制，仅校验取值。"""
        request = vehicle_request_crud.get_visible_or_404(db, request_id)
        previous = request.status
        request = vehicle_request_crud.update(db, request, {"status": status.value}, auto_commit=False)
        if status == RequestStatusEnum.CANCELLED:
            task_service.cancel_open_tasks(db, request.id)
        if previous != request.status:
            notification_service.notify_user(
                db,
                user_id=request.requester_id,
                title="需求状态已更新",
                content=f"需求「{request.title}」状态：{previous} -> {request.status}",
                notification_type=NotificationTypeEnum.REQUEST,
                target_url=f"/requests/{request.id}",
            )
        db.commit()
        db.refresh(request)
        logger.info("Request #%s status %s -> %s by #%s", request.id, previous, request.status, operator.id)
        return create_response("更新需求状态成功", serialize_request(request), HTTP_STATUS_OK)

    def cancel(self, db: Session, *, request_id: int, current_user: User) -> dict:
        request = vehicle_request_crud.get_visible_or_404(db, request_id)
        forbid_unless_owner_or_coordinator(current_user, request.requester_id, message="无权撤销他人的需求")
        if request.status in _CLOSED_STATUSES:
            raise AppException("需求已完成或已撤销", HTTP_STATUS_BAD_REQUEST)
        request = vehicle_request_crud.update(db, request, {"status": RequestStatusEnum.CANCELLED.value}, auto_commit=False)
        task_service.cancel_open_tasks(db, request.id)
        db.commit()
        db.refresh(request)
        logger.info("Request #%s cancelled by #%s", request.id, current_user.id)
        return create_response("撤销需求成功", serialize_request(request), HTTP_STATUS_OK)

    def delete(self, db: Session, *, request_id: int, current_user: User) -> dict:
        request = vehicle_request_crud.get_visible_or_404(db, request_id)
        forbid_unless_owner_or_coordinator(current_user, request.requester_id, message="无权删除他人的需求")
        vehicle_request_crud.soft_delete(db, request, auto_commit=False)
        task_service.cancel_open_tasks(db, request.id)
        db.commit()
        return create_response("删除需求成功", {"id": request_id}, HTTP_STATUS_OK)


request_service = RequestService()
