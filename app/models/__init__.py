"""模型包初始化，便于统一导入 ORM 实体并触发模型注册。"""

from app.models.notification import Notification
from app.models.organization import Organization
from app.models.request import VehicleRequest, VehicleRequestItem
from app.models.task import Task
from app.models.user import User
from app.models.vehicle import Vehicle

__all__ = [
    "Notification",
    "Organization",
    "Task",
    "User",
    "Vehicle",
    "VehicleRequest",
    "VehicleRequestItem",
]
