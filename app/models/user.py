"""用户模型：系统账号及其角色、所属机构与自报隶属信息。"""

from typing import List, Optional

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_USER_ROLE
from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class User(TimestampMixin, SoftDeleteMixin, Base):
    """用户实体。邮箱、手机号只在未删除的记录之间唯一。"""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(100))
    surname: Mapped[str] = mapped_column(String(100))
    email: Mapped[str] = mapped_column(String(255), index=True)
    phone: Mapped[str] = mapped_column(String(30), index=True)
    hashed_password: Mapped[str] = mapped_column(String(255))
    role: Mapped[str] = mapped_column(String(30), default=DEFAULT_USER_ROLE, index=True)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    declared_organization_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    declared_affiliation_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True)
    declared_position: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    organization: Mapped[Optional["Organization"]] = relationship(
        "Organization",
        primaryjoin="User.organization_id == Organization.id",
        foreign_keys="User.organization_id",
        back_populates="users",
    )
    vehicles: Mapped[List["Vehicle"]] = relationship(
        "Vehicle",
        primaryjoin="User.id == Vehicle.owner_id",
        foreign_keys="Vehicle.owner_id",
        back_populates="owner",
        viewonly=True,
    )


# 部分唯一索引：软删除后的邮箱/手机号可以被重新注册
Index(
    "uq_users_email_active",
    User.email,
    unique=True,
    postgresql_where=User.is_deleted.is_(False),
    sqlite_where=User.is_deleted.is_(False),
)
Index(
    "uq_users_phone_active",
    User.phone,
    unique=True,
    postgresql_where=User.is_deleted.is_(False),
    sqlite_where=User.is_deleted.is_(False),
)
