"""机构实体的形状校验。"""

from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.core.enums import OrganizationTypeEnum
from app.validation.common import NonEmptyStr, ShapeModel, TrimmedStr


class ContactInfo(BaseModel):
    model_config = ConfigDict(extra="ignore")

    phone: Optional[TrimmedStr] = None
    email: Optional[TrimmedStr] = None
    address: Optional[TrimmedStr] = None


class OrganizationShape(ShapeModel):
    name: NonEmptyStr
    org_type: Optional[OrganizationTypeEnum] = None
    contact: Optional[ContactInfo] = None
    is_deleted: bool = False
