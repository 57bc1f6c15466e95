"""通知模型：面向个人或整个机构的站内通知。"""

from typing import Optional

from sqlalchemy import Boolean, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.constants import DEFAULT_NOTIFICATION_TYPE, DEFAULT_NOTIFICATION_VISIBILITY
from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class Notification(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "notifications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    user_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    content: Mapped[str] = mapped_column(Text)
    target_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    is_read: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
    type: Mapped[str] = mapped_column(String(20), default=DEFAULT_NOTIFICATION_TYPE)
    visibility: Mapped[str] = mapped_column(String(20), default=DEFAULT_NOTIFICATION_VISIBILITY)
