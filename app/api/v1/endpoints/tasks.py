"""任务相关路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ListResponse, ObjectResponse
from app.api.v1.schemas.tasks import TaskCreateRequest, TaskStatusUpdateRequest
from app.core.dependencies import get_db, require_roles
from app.core.enums import RoleEnum, TaskStatusEnum
from app.models.user import User
from app.services.task_service import task_service

router = APIRouter(prefix="/tasks", tags=["tasks"])

_task_participants = require_roles(RoleEnum.COORDINATOR, RoleEnum.VEHICLE_OWNER)


@router.post("", response_model=ObjectResponse)
def assign_task(
    payload: TaskCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return task_service.assign(
        db,
        payload=payload.model_dump(mode="json", exclude_none=True),
        coordinator=current_user,
    )


@router.get("", response_model=ListResponse)
def list_tasks(
    request_id: Optional[int] = Query(None, description="按需求筛选"),
    status: Optional[TaskStatusEnum] = Query(None, description="任务状态"),
    db: Session = Depends(get_db),
    current_user: User = Depends(_task_participants),
) -> ListResponse:
    return task_service.list_tasks(db, current_user=current_user, request_id=request_id, status=status)


@router.get("/{task_id}", response_model=ObjectResponse)
def get_task(
    task_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_task_participants),
) -> ObjectResponse:
    return task_service.get_detail(db, task_id=task_id, current_user=current_user)


@router.put("/{task_id}/status", response_model=ObjectResponse)
def change_task_status(
    task_id: int,
    payload: TaskStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(_task_participants),
) -> ObjectResponse:
    return task_service.change_status(
        db,
        task_id=task_id,
        status=payload.status,
        note=payload.note,
        current_user=current_user,
    )
