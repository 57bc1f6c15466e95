"""校验层公共类型：非空字符串、引用标识、坐标与位置等可复用片段。"""

import re
from typing import Annotated, Any, ClassVar, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, StringConstraints, model_validator

from app.core.constants import MAX_REFERENCE_ID

REFERENCE_ERROR = "无效的引用标识"

_REFERENCE_PATTERN = re.compile(r"^[1-9][0-9]*$")


def is_valid_reference(value: Any) -> bool:
    """判断取值是否“看起来像”一个合法的实体标识（不超过主键范围的正整数或其十进制字符串）。"""
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return 0 < value <= MAX_REFERENCE_ID
    if isinstance(value, str):
        text = value.strip()
        return bool(_REFERENCE_PATTERN.match(text)) and int(text) <= MAX_REFERENCE_ID
    return False


def _coerce_reference(value: Any) -> Any:
    if value is None:
        return value
    if not is_valid_reference(value):
        raise ValueError(REFERENCE_ERROR)
    return int(value)


Reference = Annotated[int, BeforeValidator(_coerce_reference)]
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]


class NullAsMissingModel(BaseModel):
    """必填字段显式传入 ``null`` 时按缺失处理，与完全不传给出相同的原因。"""

    @model_validator(mode="before")
    @classmethod
    def _drop_required_nulls(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        return {
            key: value
            for key, value in data.items()
            if value is not None or key not in cls.model_fields or not cls.model_fields[key].is_required()
        }


class ShapeModel(NullAsMissingModel):
    """实体校验模型基类。

    ``required_groups`` 中列出的嵌套对象即使整体缺失，也会按叶子字段逐一报告缺失，
    例如缺少 ``driver`` 时给出 ``driver.name``、``driver.surname``、``driver.phone``。
    """

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    required_groups: ClassVar[tuple[str, ...]] = ()

    @model_validator(mode="before")
    @classmethod
    def _expand_required_groups(cls, data: Any) -> Any:
        if not isinstance(data, dict) or not cls.required_groups:
            return data
        missing = [group for group in cls.required_groups if data.get(group) is None]
        if not missing:
            return data
        return {**data, **{group: {} for group in missing}}


class OptionalLocation(BaseModel):
    """可选位置：地址与坐标均可缺省，但提供时坐标必须为数字。"""

    model_config = ConfigDict(extra="ignore")

    address: Optional[TrimmedStr] = None
    lat: Optional[float] = None
    lng: Optional[float] = None


class RequiredLocation(NullAsMissingModel):
    """必填位置：地址、纬度、经度缺一不可。"""

    model_config = ConfigDict(extra="ignore")

    address: NonEmptyStr
    lat: float
    lng: float


class Coordinates(NullAsMissingModel):
    model_config = ConfigDict(extra="ignore")

    lat: float
    lng: float
