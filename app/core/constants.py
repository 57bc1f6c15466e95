"""常量定义：HTTP 状态码、令牌类型以及各实体字段的默认值表。"""

from app.core.enums import (
    AffiliationTypeEnum,
    EntityKind,
    NotificationTypeEnum,
    NotificationVisibilityEnum,
    RequestStatusEnum,
    RoleEnum,
    TaskStatusEnum,
    VehicleStatusEnum,
)

HTTP_STATUS_OK = 200
HTTP_STATUS_CREATED = 201
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_UNAUTHORIZED = 401
HTTP_STATUS_FORBIDDEN = 403
HTTP_STATUS_NOT_FOUND = 404
HTTP_STATUS_CONFLICT = 409
HTTP_STATUS_UNPROCESSABLE_ENTITY = 422
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500

ACCESS_TOKEN_TYPE = "bearer"

DEFAULT_USER_ROLE = RoleEnum.PENDING.value
DEFAULT_AFFILIATION_TYPE = AffiliationTypeEnum.SELF.value
DEFAULT_REQUEST_STATUS = RequestStatusEnum.PENDING.value
DEFAULT_TASK_STATUS = TaskStatusEnum.PENDING.value
DEFAULT_VEHICLE_STATUS = VehicleStatusEnum.ACTIVE.value
DEFAULT_VEHICLE_AVAILABILITY = True
DEFAULT_NOTIFICATION_TYPE = NotificationTypeEnum.SYSTEM.value
DEFAULT_NOTIFICATION_VISIBILITY = NotificationVisibilityEnum.INDIVIDUAL.value

# 各实体在未显式赋值时采用的默认值；校验层与 ORM 列默认值都从这里取。
FIELD_DEFAULTS: dict[EntityKind, dict[str, object]] = {
    EntityKind.USER: {"role": DEFAULT_USER_ROLE, "is_deleted": False},
    EntityKind.VEHICLE: {
        "is_available": DEFAULT_VEHICLE_AVAILABILITY,
        "status": DEFAULT_VEHICLE_STATUS,
        "is_deleted": False,
    },
    EntityKind.REQUEST: {"status": DEFAULT_REQUEST_STATUS, "is_deleted": False},
    EntityKind.TASK: {"status": DEFAULT_TASK_STATUS, "is_deleted": False},
    EntityKind.ORGANIZATION: {"is_deleted": False},
    EntityKind.NOTIFICATION: {
        "is_read": False,
        "type": DEFAULT_NOTIFICATION_TYPE,
        "visibility": DEFAULT_NOTIFICATION_VISIBILITY,
        "is_deleted": False,
    },
}

MIN_PASSWORD_LENGTH = 6
# 引用标识与整型主键列的取值上限一致
MAX_REFERENCE_ID = 2**31 - 1
DEFAULT_COORDINATOR_NAME = "Koordinatör"
DEFAULT_COORDINATOR_SURNAME = "Sistem"
