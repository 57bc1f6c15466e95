"""通知实体的形状校验。"""

from typing import Optional

from app.core.constants import DEFAULT_NOTIFICATION_TYPE, DEFAULT_NOTIFICATION_VISIBILITY
from app.core.enums import NotificationTypeEnum, NotificationVisibilityEnum
from app.validation.common import NonEmptyStr, Reference, ShapeModel, TrimmedStr


class NotificationShape(ShapeModel):
    user_id: Optional[Reference] = None
    organization_id: Optional[Reference] = None
    title: NonEmptyStr
    content: NonEmptyStr
    target_url: Optional[TrimmedStr] = None
    is_read: bool = False
    type: NotificationTypeEnum = DEFAULT_NOTIFICATION_TYPE
    visibility: NotificationVisibilityEnum = DEFAULT_NOTIFICATION_VISIBILITY
    is_deleted: bool = False
