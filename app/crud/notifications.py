"""通知 CRUD：个人通知与机构通知的查询、已读标记。"""

from typing import List, Optional

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session

from app.core.enums import EntityKind, NotificationVisibilityEnum
from app.crud.base import CRUDBase
from app.models.notification import Notification


class CRUDNotification(CRUDBase[Notification]):
    """通知的列与校验字段一一对应，直接沿用基类的映射。"""

    not_found_message = "通知不存在或已删除"

    def _audience(self, db: Session, user_id: int, organization_id: Optional[int]):
        conditions = [
            and_(
                Notification.user_id == user_id,
                Notification.visibility == NotificationVisibilityEnum.INDIVIDUAL.value,
            )
        ]
        if organization_id is not None:
            conditions.append(
                and_(
                    Notification.organization_id == organization_id,
                    Notification.visibility == NotificationVisibilityEnum.ORGANIZATIONAL.value,
                )
            )
        return self.query(db).filter(or_(*conditions))

    def list_for_user(
        self,
        db: Session,
        *,
        user_id: int,
        organization_id: Optional[int],
        unread_only: bool = False,
    ) -> List[Notification]:
        query = self._audience(db, user_id, organization_id)
        if unread_only:
            query = query.filter(Notification.is_read.is_(False))
        return query.order_by(Notification.id.desc()).all()

    def mark_all_read(self, db: Session, *, user_id: int, organization_id: Optional[int]) -> int:
        """逐条标记已读，保证每条记录的 ``update_time`` 都被推进。"""
        items = self._audience(db, user_id, organization_id).filter(Notification.is_read.is_(False)).all()
        for item in items:
            item.is_read = True
            db.add(item)
        db.commit()
        return len(items)


notification_crud = CRUDNotification(Notification, EntityKind.NOTIFICATION)
