"""角色判定与拦截的统一封装。

关于“协调员 / 车主 / 需求方”的判定集中在这里，避免到处散落对角色取值的硬编码。
"""

from __future__ import annotations

from typing import Iterable

from app.core.constants import HTTP_STATUS_FORBIDDEN
from app.core.enums import RoleEnum
from app.core.exceptions import AppException


def has_role(user: object, *roles: RoleEnum | str) -> bool:
    allowed = {role.value if isinstance(role, RoleEnum) else role for role in roles}
    return getattr(user, "role", None) in allowed


def is_coordinator(user: object) -> bool:
    return has_role(user, RoleEnum.COORDINATOR)


def is_vehicle_owner(user: object) -> bool:
    return has_role(user, RoleEnum.VEHICLE_OWNER)


def is_requester(user: object) -> bool:
    return has_role(user, RoleEnum.REQUESTER)


def forbid_unless_roles(user: object, roles: Iterable[RoleEnum | str], *, message: str = "无权执行该操作") -> None:
    if not has_role(user, *roles):
        raise AppException(message, HTTP_STATUS_FORBIDDEN)


def forbid_unless_owner_or_coordinator(user: object, owner_id: int | None, *, message: str = "无权操作他人的数据") -> None:
    """本人或协调员可以操作，其余情况拒绝。"""
    if is_coordinator(user):
        return
    if owner_id is None or getattr(user, "id", None) != owner_id:
        raise AppException(message, HTTP_STATUS_FORBIDDEN)
