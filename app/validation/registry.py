"""校验入口：按实体种类分派到对应的形状模型。

``validate`` 成功时返回校验后的模型（默认值已补齐），失败时抛出
``ShapeValidationError``，其中按字段列出本轮发现的全部问题。
"""

from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError

from app.core.enums import EntityKind
from app.core.exceptions import ReferenceFormatError, ShapeValidationError
from app.validation.common import REFERENCE_ERROR, ShapeModel
from app.validation.errors import field_errors_from_pydantic
from app.validation.notification import NotificationShape
from app.validation.organization import OrganizationShape
from app.validation.request import RequestShape
from app.validation.task import TaskShape
from app.validation.user import UserShape
from app.validation.vehicle import VehicleShape

ENTITY_SHAPES: dict[EntityKind, type[ShapeModel]] = {
    EntityKind.USER: UserShape,
    EntityKind.VEHICLE: VehicleShape,
    EntityKind.REQUEST: RequestShape,
    EntityKind.TASK: TaskShape,
    EntityKind.ORGANIZATION: OrganizationShape,
    EntityKind.NOTIFICATION: NotificationShape,
}


def collect_errors(kind: Union[EntityKind, str], payload: Optional[Mapping[str, Any]]) -> dict[str, str]:
    """不抛异常的校验：返回字段错误映射，合法时返回空字典。"""
    shape = ENTITY_SHAPES[EntityKind(kind)]
    try:
        shape.model_validate(dict(payload or {}))
    except ValidationError as exc:
        return field_errors_from_pydantic(exc.errors())
    return {}


def validate(kind: Union[EntityKind, str], payload: Optional[Mapping[str, Any]]) -> ShapeModel:
    shape = ENTITY_SHAPES[EntityKind(kind)]
    try:
        return shape.model_validate(dict(payload or {}))
    except ValidationError as exc:
        field_errors = field_errors_from_pydantic(exc.errors())
        if all(reason == REFERENCE_ERROR for reason in field_errors.values()):
            raise ReferenceFormatError(field_errors) from exc
        raise ShapeValidationError(field_errors) from exc
