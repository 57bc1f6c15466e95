"""车辆需求相关的请求模型。"""

from typing import List, Optional

from pydantic import BaseModel, Field

from app.api.v1.schemas.common import LocationBody
from app.core.enums import RequestStatusEnum


class VehicleRequirementBody(BaseModel):
    vehicle_type: Optional[str] = Field(default=None, description="车型")
    count: Optional[int] = Field(default=None, description="数量")


class RequestCreateRequest(BaseModel):
    title: Optional[str] = Field(default=None, description="标题")
    description: Optional[str] = Field(default=None, description="需求说明")
    requester_organization_id: Optional[int] = Field(default=None, description="需求方机构，缺省取当前用户所属机构")
    vehicles: List[VehicleRequirementBody] = Field(..., min_length=1, description="车型明细，至少一项")
    location: Optional[LocationBody] = Field(default=None, description="用车地点")


class RequestStatusUpdateRequest(BaseModel):
    status: RequestStatusEnum = Field(..., description="新的需求状态")
