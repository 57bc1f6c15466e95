"""任务模型：协调员把需求分派给具体车辆与司机。"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.constants import DEFAULT_TASK_STATUS
from app.models.base import Base, SoftDeleteMixin, TimestampMixin


class Task(TimestampMixin, SoftDeleteMixin, Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    request_id: Mapped[int] = mapped_column(Integer, index=True)
    vehicle_id: Mapped[int] = mapped_column(Integer, index=True)
    coordinator_id: Mapped[int] = mapped_column(Integer, index=True)
    driver_name: Mapped[str] = mapped_column(String(100))
    driver_surname: Mapped[str] = mapped_column(String(100))
    driver_phone: Mapped[str] = mapped_column(String(30))
    status: Mapped[str] = mapped_column(String(30), default=DEFAULT_TASK_STATUS, index=True)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    target_lat: Mapped[float] = mapped_column(Float)
    target_lng: Mapped[float] = mapped_column(Float)
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    finished_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    request: Mapped["VehicleRequest"] = relationship(
        "VehicleRequest",
        primaryjoin="Task.request_id == VehicleRequest.id",
        foreign_keys="Task.request_id",
        viewonly=True,
    )
    vehicle: Mapped["Vehicle"] = relationship(
        "Vehicle",
        primaryjoin="Task.vehicle_id == Vehicle.id",
        foreign_keys="Task.vehicle_id",
        viewonly=True,
    )
