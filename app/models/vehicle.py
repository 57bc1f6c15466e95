"""车辆模型：车主登记的可调度车辆。"""

from typing import Optional

from sqlalchemy import Boolean, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_VEHICLE_AVAILABILITY, DEFAULT_VEHICLE_STATUS
from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class Vehicle(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "vehicles"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    plate: Mapped[str] = mapped_column(String(30), index=True)
    vehicle_type: Mapped[str] = mapped_column(String(30), index=True)
    usage_purpose: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    capacity: Mapped[int] = mapped_column(Integer)
    is_available: Mapped[bool] = mapped_column(Boolean, default=DEFAULT_VEHICLE_AVAILABILITY, index=True)
    status: Mapped[str] = mapped_column(String(20), default=DEFAULT_VEHICLE_STATUS, index=True)
    location_address: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    location_lat: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    location_lng: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    organization_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)
    owner_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, index=True)

    owner: Mapped[Optional["User"]] = relationship(
        "User",
        primaryjoin="Vehicle.owner_id == User.id",
        foreign_keys="Vehicle.owner_id",
        back_populates="vehicles",
    )


Index(
    "uq_vehicles_plate_active",
    Vehicle.plate,
    unique=True,
    postgresql_where=Vehicle.is_deleted.is_(False),
    sqlite_where=Vehicle.is_deleted.is_(False),
)
