"""任务实体的形状校验。"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import ConfigDict

from app.core.constants import DEFAULT_TASK_STATUS
from app.core.enums import TaskStatusEnum
from app.validation.common import Coordinates, NonEmptyStr, NullAsMissingModel, Reference, ShapeModel, TrimmedStr


class DriverInfo(NullAsMissingModel):
    """司机信息：姓名、姓氏、电话必须整体提供。"""

    model_config = ConfigDict(extra="ignore")

    name: NonEmptyStr
    surname: NonEmptyStr
    phone: NonEmptyStr


class TaskShape(ShapeModel):
    required_groups: ClassVar[tuple[str, ...]] = ("driver", "target_location")

    request_id: Reference
    vehicle_id: Reference
    coordinator_id: Reference
    driver: DriverInfo
    status: TaskStatusEnum = DEFAULT_TASK_STATUS
    note: Optional[TrimmedStr] = None
    target_location: Coordinates
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    is_deleted: bool = False
