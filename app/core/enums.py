"""枚举定义：系统内全部封闭取值集合的唯一来源。

校验层与前端下拉选项（``/options`` 接口）都从这里读取，保证两端一致。
存储值沿用业务方约定的土耳其语字面量。
"""

from enum import Enum
from typing import Type


class EntityKind(str, Enum):
    """需要经过校验层的实体种类。"""

    USER = "user"
    VEHICLE = "vehicle"
    REQUEST = "request"
    TASK = "task"
    ORGANIZATION = "organization"
    NOTIFICATION = "notification"


class RoleEnum(str, Enum):
    """用户角色。新注册用户默认处于待分配状态。"""

    PENDING = "beklemede"
    VEHICLE_OWNER = "arac_sahibi"
    REQUESTER = "talep_eden"
    COORDINATOR = "koordinator"


class AffiliationTypeEnum(str, Enum):
    """用户自报的隶属方式。"""

    ON_BEHALF_OF_ORGANIZATION = "kurulus_adina"
    SELF = "kendi_adima"


class VehicleTypeEnum(str, Enum):
    CAR = "otomobil"
    VAN = "kamyonet"
    MINIBUS = "minibüs"
    BUS = "otobüs"
    TRUCK = "kamyon"
    TOW_TRUCK = "çekici(Tır)"
    PICKUP = "pick-Up"
    TANKER = "tanker"
    SEMI_TRAILER = "y.Römork"
    LOWBED = "lowbed"
    MOTORCYCLE = "motosiklet"


class UsagePurposeEnum(str, Enum):
    PASSENGER = "yolcu"
    CARGO = "yuk"


class VehicleStatusEnum(str, Enum):
    ACTIVE = "aktif"
    INACTIVE = "pasif"


class RequestStatusEnum(str, Enum):
    """车辆需求状态：仅约束取值集合，不限制迁移路径。"""

    PENDING = "beklemede"
    ASSIGNED = "gorevlendirildi"
    COMPLETED = "tamamlandı"
    CANCELLED = "iptal edildi"


class TaskStatusEnum(str, Enum):
    """任务状态：仅约束取值集合，不限制迁移路径。"""

    PENDING = "beklemede"
    STARTED = "başladı"
    COMPLETED = "tamamlandı"
    CANCELLED = "iptal edildi"


class OrganizationTypeEnum(str, Enum):
    PUBLIC = "kamu"
    PRIVATE = "özel"


class NotificationTypeEnum(str, Enum):
    TASK = "gorev"
    REQUEST = "talep"
    SYSTEM = "sistem"


class NotificationVisibilityEnum(str, Enum):
    INDIVIDUAL = "bireysel"
    ORGANIZATIONAL = "kurumsal"


# 对外暴露的选项表名称 -> 枚举类
ENUM_TABLES: dict[str, Type[Enum]] = {
    "roles": RoleEnum,
    "affiliation_types": AffiliationTypeEnum,
    "vehicle_types": VehicleTypeEnum,
    "usage_purposes": UsagePurposeEnum,
    "vehicle_statuses": VehicleStatusEnum,
    "request_statuses": RequestStatusEnum,
    "task_statuses": TaskStatusEnum,
    "organization_types": OrganizationTypeEnum,
    "notification_types": NotificationTypeEnum,
    "notification_visibilities": NotificationVisibilityEnum,
}


def enum_values(enum_cls: Type[Enum]) -> list[str]:
    """按声明顺序返回枚举的存储值。"""
    return [member.value for member in enum_cls]


def enum_options(name: str) -> list[dict[str, str]]:
    """返回指定选项表的 ``value/label`` 列表，未知名称抛出 ``KeyError``。"""
    enum_cls = ENUM_TABLES[name]
    return [{"value": member.value, "label": member.name.lower()} for member in enum_cls]
