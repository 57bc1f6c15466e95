"""车辆需求模型：需求方提交的用车需求及其车型明细。"""

from typing import List

from sqlalchemy import Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_REQUEST_STATUS
from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class VehicleRequest(TimestampMixin, SoftDeleteMixin, Base):
    """需求主表。位置信息必填，状态仅约束取值集合。"""

    __tablename__ = "vehicle_requests"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text)
    requester_id: Mapped[int] = mapped_column(Integer, index=True)
    requester_organization_id: Mapped[int] = mapped_column(Integer, index=True)
    location_address: Mapped[str] = mapped_column(String(500))
    location_lat: Mapped[float] = mapped_column(Float)
    location_lng: Mapped[float] = mapped_column(Float)
    status: Mapped[str] = mapped_column(String(30), default=DEFAULT_REQUEST_STATUS, index=True)

    items: Mapped[List["VehicleRequestItem"]] = relationship(
        "VehicleRequestItem",
        back_populates="request",
        order_by="VehicleRequestItem.position",
        cascade="all, delete-orphan",
    )
    requester: Mapped["User"] = relationship(
        "User",
        primaryjoin="VehicleRequest.requester_id == User.id",
        foreign_keys="VehicleRequest.requester_id",
        viewonly=True,
    )


class VehicleRequestItem(Base):
    """需求明细行，按 ``position`` 保持提交时的顺序。"""

    __tablename__ = "vehicle_request_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    request_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("vehicle_requests.id", ondelete="CASCADE"), index=True
    )
    position: Mapped[int] = mapped_column(Integer, default=0)
    vehicle_type: Mapped[str] = mapped_column(String(30))
    count: Mapped[int] = mapped_column(Integer)

    request: Mapped[VehicleRequest] = relationship("VehicleRequest", back_populates="items")
