"""机构模型：公共机构或私营企业，用户、车辆、需求都可以归属某个机构。"""

from typing import List, Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class Organization(TimestampMixin, SoftDeleteMixin, Base):
    """机构实体；联系方式三个字段各自可选，拍平成列存储。"""

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), index=True)
    org_type: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    contact_phone: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    contact_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    contact_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    users: Mapped[List["User"]] = relationship(
        "User",
        primaryjoin="User.organization_id == Organization.id",
        foreign_keys="User.organization_id",
        back_populates="organization",
    )
