"""通知相关的请求模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import NotificationTypeEnum, NotificationVisibilityEnum


class NotificationCreateRequest(BaseModel):
    user_id: Optional[int] = Field(default=None, description="接收用户，个人通知必填")
    organization_id: Optional[int] = Field(default=None, description="接收机构，机构通知必填")
    title: Optional[str] = Field(default=None, description="标题")
    content: Optional[str] = Field(default=None, description="内容")
    target_url: Optional[str] = Field(default=None, description="跳转地址")
    type: NotificationTypeEnum = Field(default=NotificationTypeEnum.SYSTEM, description="通知类型")
    visibility: NotificationVisibilityEnum = Field(
        default=NotificationVisibilityEnum.INDIVIDUAL,
        description="个人通知或机构通知",
    )
