"""通知服务：站内通知的查询、发送与已读管理，并为其他业务提供投递入口。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_NOT_FOUND, HTTP_STATUS_OK
from app.core.enums import NotificationTypeEnum, NotificationVisibilityEnum
from app.core.exceptions import AppException
from app.core.guards import is_coordinator
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.notifications import notification_crud
from app.models.notification import Notification
from app.models.user import User


class NotificationService:
    """个人通知只对接收人可见，机构通知对同一机构的全部成员可见。"""

    def notify_user(
        self,
        db: Session,
        *,
        user_id: Optional[int],
        title: str,
        content: str,
        notification_type: NotificationTypeEnum,
        target_url: Optional[str] = None,
    ) -> Optional[Notification]:
        """投递一条个人通知，不提交事务，由调用方统一提交。"""
        if user_id is None:
            return None
        return notification_crud.create(
            db,
            {
                "user_id": user_id,
                "title": title,
                "content": content,
                "type": notification_type.value,
                "target_url": target_url,
                "visibility": NotificationVisibilityEnum.INDIVIDUAL.value,
            },
            auto_commit=False,
        )

    def list_for_user(self, db: Session, *, current_user: User, unread_only: bool = False) -> dict:
        items = notification_crud.list_for_user(
            db,
            user_id=current_user.id,
            organization_id=current_user.organization_id,
            unread_only=unread_only,
        )
        data = {
            "items": [self._serialize(item) for item in items],
            "unread_count": sum(1 for item in items if not item.is_read),
        }
        return create_response("获取通知列表成功", data, HTTP_STATUS_OK)

    def mark_read(self, db: Session, *, notification_id: int, current_user: User) -> dict:
        notification = self._get_for_user(db, notification_id, current_user)
        if not notification.is_read:
            notification = notification_crud.update(db, notification, {"is_read": True})
        return create_response("标记已读成功", self._serialize(notification), HTTP_STATUS_OK)

    def mark_all_read(self, db: Session, *, current_user: User) -> dict:
        updated = notification_crud.mark_all_read(
            db,
            user_id=current_user.id,
            organization_id=current_user.organization_id,
        )
        return create_response("全部标记已读成功", {"updated": updated}, HTTP_STATUS_OK)

    def send(self, db: Session, *, payload: Dict[str, Any]) -> dict:
        """协调员手动发送通知；个人通知需指定接收人，机构通知需指定机构。"""
        visibility = payload.get("visibility") or NotificationVisibilityEnum.INDIVIDUAL.value
        if visibility == NotificationVisibilityEnum.INDIVIDUAL.value and payload.get("user_id") is None:
            raise AppException("个人通知必须指定接收用户")
        if visibility == NotificationVisibilityEnum.ORGANIZATIONAL.value and payload.get("organization_id") is None:
            raise AppException("机构通知必须指定接收机构")
        notification = notification_crud.create(db, {**payload, "visibility": visibility})
        return create_response("发送通知成功", self._serialize(notification), HTTP_STATUS_OK)

    def delete(self, db: Session, *, notification_id: int, current_user: User) -> dict:
        if is_coordinator(current_user):
            notification = notification_crud.get_visible_or_404(db, notification_id)
        else:
            notification = self._get_for_user(db, notification_id, current_user)
        notification_crud.soft_delete(db, notification)
        return create_response("删除通知成功", {"id": notification_id}, HTTP_STATUS_OK)

    def _get_for_user(self, db: Session, notification_id: int, current_user: User) -> Notification:
        notification = notification_crud.get_visible_or_404(db, notification_id)
        if not self._is_recipient(notification, current_user):
            # 不暴露他人通知是否存在
            raise AppException(notification_crud.not_found_message, HTTP_STATUS_NOT_FOUND)
        return notification

    @staticmethod
    def _is_recipient(notification: Notification, user: User) -> bool:
        if notification.visibility == NotificationVisibilityEnum.ORGANIZATIONAL.value:
            return user.organization_id is not None and notification.organization_id == user.organization_id
        return notification.user_id == user.id

    @staticmethod
    def _serialize(notification: Notification) -> dict:
        return {
            "id": notification.id,
            "user_id": notification.user_id,
            "organization_id": notification.organization_id,
            "title": notification.title,
            "content": notification.content,
            "target_url": notification.target_url,
            "is_read": notification.is_read,
            "type": notification.type,
            "visibility": notification.visibility,
            "create_time": format_datetime(notification.create_time),
        }


notification_service = NotificationService()
