"""通知相关路由定义。"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ObjectResponse
from app.api.v1.schemas.notifications import NotificationCreateRequest
from app.core.dependencies import get_current_active_user, get_db, require_roles
from app.core.enums import RoleEnum
from app.models.user import User
from app.services.notification_service import notification_service

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=ObjectResponse)
def list_notifications(
    unread_only: bool = Query(False, description="只看未读"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ObjectResponse:
    return notification_service.list_for_user(db, current_user=current_user, unread_only=unread_only)


# 固定路径需先于 ``/{notification_id}/read`` 注册
@router.put("/read-all", response_model=ObjectResponse)
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ObjectResponse:
    return notification_service.mark_all_read(db, current_user=current_user)


@router.put("/{notification_id}/read", response_model=ObjectResponse)
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ObjectResponse:
    return notification_service.mark_read(db, notification_id=notification_id, current_user=current_user)


@router.post("", response_model=ObjectResponse)
def send_notification(
    payload: NotificationCreateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return notification_service.send(db, payload=payload.model_dump(mode="json", exclude_none=True))


@router.delete("/{notification_id}", response_model=ObjectResponse)
def delete_notification(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> ObjectResponse:
    return notification_service.delete(db, notification_id=notification_id, current_user=current_user)
