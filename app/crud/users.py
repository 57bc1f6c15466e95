"""用户 CRUD：集中管理用户相关的数据操作。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.crud.base import CRUDBase
from app.models.user import User
from app.validation.common import ShapeModel


class CRUDUser(CRUDBase[User]):
    """封装常用的用户查询方法，供业务层复用。

    校验层里的 ``password`` 对应存储层的 ``hashed_password``，
    自报隶属信息拍平为 ``declared_*`` 三列。
    """

    unique_fields = ("email", "phone")
    not_found_message = "用户不存在或已删除"

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        """根据邮箱获取未删除的用户，比较时忽略大小写。"""
        return self.query(db).filter(User.email == email.strip().lower()).first()

    def get_by_phone(self, db: Session, phone: str) -> Optional[User]:
        return self.query(db).filter(User.phone == phone).first()

    def to_payload(self, db_obj: User) -> Dict[str, Any]:
        declared = None
        if any(
            value is not None
            for value in (
                db_obj.declared_organization_name,
                db_obj.declared_affiliation_type,
                db_obj.declared_position,
            )
        ):
            declared = {
                "organization_name": db_obj.declared_organization_name,
                "affiliation_type": db_obj.declared_affiliation_type,
                "position": db_obj.declared_position,
            }
        return {
            "name": db_obj.name,
            "surname": db_obj.surname,
            "email": db_obj.email,
            "phone": db_obj.phone,
            "password": db_obj.hashed_password,
            "role": db_obj.role,
            "organization_id": db_obj.organization_id,
            "declared_affiliation": declared,
            "is_deleted": db_obj.is_deleted,
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        declared = shape.declared_affiliation
        return {
            "name": shape.name,
            "surname": shape.surname,
            "email": shape.email,
            "phone": shape.phone,
            "hashed_password": shape.password,
            "role": shape.role,
            "organization_id": shape.organization_id,
            "declared_organization_name": declared.organization_name if declared else None,
            "declared_affiliation_type": declared.affiliation_type if declared else None,
            "declared_position": declared.position if declared else None,
            "is_deleted": shape.is_deleted,
        }


user_crud = CRUDUser(User, EntityKind.USER)
