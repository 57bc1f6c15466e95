"""认证相关的请求与响应模型。"""

import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError, field_validator

from app.api.v1.schemas.common import ResponseEnvelope
from app.core.constants import MIN_PASSWORD_LENGTH
from app.core.enums import AffiliationTypeEnum

_PHONE_PATTERN = re.compile(r"^\+?\d{10,13}$")
_PHONE_SEPARATORS = re.compile(r"[\s\-()]")


def normalize_phone(value: str) -> str:
    """去掉空格、连字符与括号后校验：可选的 ``+`` 加 10 到 13 位数字。"""
    compact = _PHONE_SEPARATORS.sub("", value or "")
    if not _PHONE_PATTERN.match(compact):
        raise ValueError("手机号格式不正确")
    return compact


class RegisterRequest(BaseModel):
    """注册请求体。"""

    name: str = Field(..., min_length=1, description="名")
    surname: str = Field(..., min_length=1, description="姓")
    email: EmailStr = Field(..., description="邮箱，作为登录账号")
    password: str = Field(..., description="密码")
    phone: str = Field(..., description="手机号")
    organization_name: Optional[str] = Field(default=None, description="自报的所属机构名称")
    affiliation_type: Optional[AffiliationTypeEnum] = Field(default=None, description="以机构名义或以个人名义")
    position: Optional[str] = Field(default=None, description="职务")

    @field_validator("name", "surname")
    @classmethod
    def _strip_names(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("不能为空")
        return value

    @field_validator("email", mode="wrap")
    @classmethod
    def _check_email(cls, value: Any, handler) -> str:
        if isinstance(value, str):
            value = value.strip().lower()
        try:
            return handler(value)
        except ValidationError as exc:
            raise ValueError("邮箱格式不正确") from exc

    @field_validator("password")
    @classmethod
    def _check_password(cls, value: str) -> str:
        if len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(f"密码长度不能少于{MIN_PASSWORD_LENGTH}位")
        return value

    @field_validator("phone")
    @classmethod
    def _check_phone(cls, value: str) -> str:
        return normalize_phone(value)


class LoginRequest(BaseModel):
    """登录请求体。"""

    email: str = Field(..., min_length=1, description="邮箱")
    password: str = Field(..., min_length=1, description="密码")


class TokenData(BaseModel):
    access_token: str
    token_type: str
    user: Dict[str, Any]


class TokenResponse(ResponseEnvelope[TokenData]):
    """登录、注册成功后的响应。"""


class LogoutResponse(ResponseEnvelope[None]):
    """退出登录响应。"""
