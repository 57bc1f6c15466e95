"""任务相关的请求模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import TaskStatusEnum


class DriverBody(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    phone: Optional[str] = None


class CoordinatesBody(BaseModel):
    lat: Optional[float] = None
    lng: Optional[float] = None


class TaskCreateRequest(BaseModel):
    request_id: int = Field(..., description="需求 ID")
    vehicle_id: int = Field(..., description="车辆 ID")
    driver: Optional[DriverBody] = Field(default=None, description="司机信息")
    target_location: Optional[CoordinatesBody] = Field(default=None, description="目的地坐标")
    note: Optional[str] = Field(default=None, description="备注")


class TaskStatusUpdateRequest(BaseModel):
    status: TaskStatusEnum = Field(..., description="新的任务状态")
    note: Optional[str] = Field(default=None, description="备注")
