"""用户实体的形状校验。"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.core.constants import DEFAULT_USER_ROLE
from app.core.enums import AffiliationTypeEnum, RoleEnum
from app.validation.common import NonEmptyStr, Reference, ShapeModel, TrimmedStr


class DeclaredAffiliation(BaseModel):
    """用户注册时自报的隶属信息，三个字段均可缺省。"""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    organization_name: Optional[TrimmedStr] = None
    affiliation_type: Optional[AffiliationTypeEnum] = None
    position: Optional[TrimmedStr] = None


class UserShape(ShapeModel):
    name: NonEmptyStr
    surname: NonEmptyStr
    email: NonEmptyStr
    phone: NonEmptyStr
    # 存储的是 bcrypt 哈希，明文密码长度在注册接口处校验
    password: NonEmptyStr
    role: RoleEnum = DEFAULT_USER_ROLE
    organization_id: Optional[Reference] = None
    declared_affiliation: Optional[DeclaredAffiliation] = None
    is_deleted: bool = False

    @field_validator("email")
    @classmethod
    def _lower_email(cls, value: str) -> str:
        return value.lower()
