"""用户相关的请求与响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import RoleEnum


class RoleChangeRequest(BaseModel):
    """协调员为用户分配角色，可同时指定其所属机构。"""

    role: RoleEnum = Field(..., description="新的角色")
    organization_id: Optional[int] = Field(default=None, description="所属机构 ID")
