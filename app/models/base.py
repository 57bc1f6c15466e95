"""模型基类：统一声明式基类、时间戳与软删除字段。

本模块集中提供：
- Base：SQLAlchemy 声明式基类，带统一命名约定；
- TimestampMixin：`create_time`、`update_time`，时间在应用侧生成（UTC，带时区）；
- SoftDeleteMixin：`is_deleted`，记录只做逻辑删除。

`update_time` 在每次 UPDATE 前都会被推进，并保证严格大于上一次的取值。
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import Boolean, DateTime, MetaData, event, inspect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import expression

convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata_obj = MetaData(naming_convention=convention)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    # SQLite 读回的是无时区时间，统一按 UTC 解释
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def next_update_time(previous: Optional[datetime]) -> datetime:
    """返回新的更新时间；时钟未前进时在上一次取值基础上加 1 微秒。"""
    current = utcnow()
    if previous is None:
        return current
    previous_utc = _as_utc(previous)
    if current <= previous_utc:
        return previous_utc + timedelta(microseconds=1)
    return current


class Base(DeclarativeBase):
    """全局声明式基类，附带一致的命名约定，便于迁移与调试。"""

    metadata = metadata_obj


class TimestampMixin:
    """通用时间戳字段，为记录新增、更新提供审计能力。"""

    create_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    update_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)


class SoftDeleteMixin:
    """软删除字段，避免物理删除导致数据丢失。"""

    is_deleted: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        server_default=expression.false(),
        nullable=False,
        index=True,
    )


@event.listens_for(TimestampMixin, "before_update", propagate=True)
def _advance_update_time(mapper, connection, target) -> None:
    state = inspect(target)
    previous = state.committed_state.get("update_time", state.dict.get("update_time"))
    if not isinstance(previous, datetime):
        previous = None
    target.update_time = next_update_time(previous)
