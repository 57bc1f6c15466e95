"""机构服务：机构的查询与维护。"""

from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.constants import HTTP_STATUS_OK
from app.core.responses import create_response
from app.core.timezone import format_datetime
from app.crud.organizations import organization_crud
from app.models.organization import Organization


def serialize_organization(organization: Organization) -> dict:
    return {
        "id": organization.id,
        "name": organization.name,
        "org_type": organization.org_type,
        "contact": {
            "phone": organization.contact_phone,
            "email": organization.contact_email,
            "address": organization.contact_address,
        },
        "create_time": format_datetime(organization.create_time),
        "update_time": format_datetime(organization.update_time),
    }


class OrganizationService:
    def list_organizations(self, db: Session) -> dict:
        """注册页面需要选择机构，因此列表对匿名用户开放。"""
        items = organization_crud.query(db).order_by(Organization.name.asc()).all()
        data = [serialize_organization(item) for item in items]
        return create_response("获取机构列表成功", data, HTTP_STATUS_OK)

    def get_detail(self, db: Session, *, organization_id: int) -> dict:
        organization = organization_crud.get_visible_or_404(db, organization_id)
        return create_response("获取机构详情成功", serialize_organization(organization), HTTP_STATUS_OK)

    def create(self, db: Session, *, payload: Dict[str, Any]) -> dict:
        organization = organization_crud.create(db, payload)
        return create_response("创建机构成功", serialize_organization(organization), HTTP_STATUS_OK)

    def update(self, db: Session, *, organization_id: int, changes: Dict[str, Any]) -> dict:
        organization = organization_crud.get_visible_or_404(db, organization_id)
        organization = organization_crud.update(db, organization, changes)
        return create_response("更新机构成功", serialize_organization(organization), HTTP_STATUS_OK)

    def delete(self, db: Session, *, organization_id: int) -> dict:
        organization = organization_crud.get_visible_or_404(db, organization_id)
        organization_crud.soft_delete(db, organization)
        return create_response("删除机构成功", {"id": organization_id}, HTTP_STATUS_OK)


organization_service = OrganizationService()
