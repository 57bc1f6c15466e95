"""机构相关的请求模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.core.enums import OrganizationTypeEnum


class ContactBody(BaseModel):
    phone: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None


class OrganizationCreateRequest(BaseModel):
    name: Optional[str] = Field(default=None, description="机构名称")
    org_type: Optional[OrganizationTypeEnum] = Field(default=None, description="公共机构或私营企业")
    contact: Optional[ContactBody] = Field(default=None, description="联系方式")


class OrganizationUpdateRequest(OrganizationCreateRequest):
    """更新时只提交需要修改的字段。"""
