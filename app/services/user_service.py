"""用户服务：个人资料、用户列表以及角色分配、软删除。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_BAD_REQUEST, HTTP_STATUS_OK
from app.core.enums import NotificationTypeEnum, RoleEnum
from app.core.exceptions import AppException
from app.core.logger import logger
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.organizations import organization_crud
from app.crud.users import user_crud
from app.models.user import User
from app.services.notification_service import notification_service


def serialize_user(user: User) -> dict:
    """整理用户对外可见的字段，不包含密码哈希。"""
    organization = None
    if user.organization is not None and not user.organization.is_deleted:
        organization = {"id": user.organization.id, "name": user.organization.name}

    declared = None
    if user.declared_affiliation_type or user.declared_organization_name or user.declared_position:
        declared = {
            "organization_name": user.declared_organization_name,
            "affiliation_type": user.declared_affiliation_type,
            "position": user.declared_position,
        }

    return {
        "id": user.id,
        "name": user.name,
        "surname": user.surname,
        "email": user.email,
        "phone": user.phone,
        "role": user.role,
        "organization_id": user.organization_id,
        "organization": organization,
        "declared_affiliation": declared,
        "create_time": format_datetime(user.create_time),
        "update_time": format_datetime(user.update_time),
    }


class UserService:
    """聚合用户信息，生成前端友好的数据结构。"""

    def build_user_profile(self, user: User) -> dict:
        return create_response("获取用户信息成功", serialize_user(user), HTTP_STATUS_OK)

    def list_users(
        self,
        db: Session,
        *,
        role: Optional[RoleEnum] = None,
        page: int = 1,
        page_size: int = 20,
    ) -> dict:
        page = max(page, 1)
        page_size = max(page_size, 1)
        filters = {"role": role.value if role else None}
        items = user_crud.get_multi(db, skip=(page - 1) * page_size, limit=page_size, filters=filters)
        payload = {
            "total": user_crud.count(db, filters=filters),
            "items": [serialize_user(item) for item in items],
            "page": page,
            "page_size": page_size,
        }
        return create_response("获取用户列表成功", payload, HTTP_STATUS_OK)

    def change_role(
        self,
        db: Session,
        *,
        user_id: int,
        role: RoleEnum,
        organization_id: Optional[int] = None,
        operator: User,
    ) -> dict:
        """协调员审批或调整用户角色，可同时指定所属机构。"""
        user = user_crud.get_visible_or_404(db, user_id)
        changes: dict = {"role": role.value}
        if organization_id is not None:
            organization_crud.get_visible_or_404(db, organization_id)
            changes["organization_id"] = organization_id

        previous_role = user.role
        user = user_crud.update(db, user, changes, auto_commit=False)
        if previous_role != user.role:
            notification_service.notify_user(
                db,
                user_id=user.id,
                title="账号角色已更新",
                content=f"您的角色已由 {previous_role} 调整为 {user.role}",
                notification_type=NotificationTypeEnum.SYSTEM,
            )
        db.commit()
        db.refresh(user)
        logger.info("User #%s role changed %s -> %s by #%s", user.id, previous_role, user.role, operator.id)
        return create_response("更新用户角色成功", serialize_user(user), HTTP_STATUS_OK)

    def delete_user(self, db: Session, *, user_id: int, operator: User) -> dict:
        if user_id == operator.id:
            raise AppException("不能删除当前登录用户", HTTP_STATUS_BAD_REQUEST)
        user = user_crud.get_visible_or_404(db, user_id)
        user_crud.soft_delete(db, user)
        return create_response("删除用户成功", {"id": user_id}, HTTP_STATUS_OK)


user_service = UserService()
