"""车辆相关的请求模型。

字段的必填、取值范围由实体校验层统一检查，这里只约束基本类型。
"""

from typing import Optional

from pydantic import BaseModel, Field

from app.api.v1.schemas.common import LocationBody


class VehicleCreateRequest(BaseModel):
    plate: Optional[str] = Field(default=None, description="车牌号")
    vehicle_type: Optional[str] = Field(default=None, description="车型")
    usage_purpose: Optional[str] = Field(default=None, description="用途：载人或载货")
    capacity: Optional[int] = Field(default=None, description="载客人数或载重")
    is_available: Optional[bool] = Field(default=None, description="是否可调度")
    status: Optional[str] = Field(default=None, description="启用状态")
    location: Optional[LocationBody] = Field(default=None, description="当前位置")
    organization_id: Optional[int] = Field(default=None, description="所属机构")
    owner_id: Optional[int] = Field(default=None, description="车主，仅协调员可指定")


class VehicleUpdateRequest(VehicleCreateRequest):
    """更新时只提交需要修改的字段。"""
