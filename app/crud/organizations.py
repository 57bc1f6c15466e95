"""机构 CRUD：管理机构相关的数据库操作。"""

from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.core.enums import EntityKind
from app.crud.base import CRUDBase
from app.models.organization import Organization
from app.validation.common import ShapeModel


class CRUDOrganization(CRUDBase[Organization]):
    """提供机构实体的便捷查询方法。"""

    not_found_message = "机构不存在或已删除"

    def get_by_name(self, db: Session, name: str) -> Optional[Organization]:
        """按照名称检索未删除的机构。"""
        return self.query(db).filter(Organization.name == name).first()

    def to_payload(self, db_obj: Organization) -> Dict[str, Any]:
        return {
            "name": db_obj.name,
            "org_type": db_obj.org_type,
            "contact": {
                "phone": db_obj.contact_phone,
                "email": db_obj.contact_email,
                "address": db_obj.contact_address,
            },
            "is_deleted": db_obj.is_deleted,
        }

    def to_columns(self, shape: ShapeModel) -> Dict[str, Any]:
        contact = shape.contact
        return {
            "name": shape.name,
            "org_type": shape.org_type,
            "contact_phone": contact.phone if contact else None,
            "contact_email": contact.email if contact else None,
            "contact_address": contact.address if contact else None,
            "is_deleted": shape.is_deleted,
        }


organization_crud = CRUDOrganization(Organization, EntityKind.ORGANIZATION)
