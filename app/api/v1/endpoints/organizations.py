"""机构相关路由定义。"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ListResponse, ObjectResponse
from app.api.v1.schemas.organizations import OrganizationCreateRequest, OrganizationUpdateRequest
from app.core.dependencies import get_db, require_roles
from app.core.enums import RoleEnum
from app.models.user import User
from app.services.organization_service import organization_service

router = APIRouter(prefix="/organizations", tags=["organizations"])


@router.get("", response_model=ListResponse)
def list_organizations(db: Session = Depends(get_db)) -> ListResponse:
    """公开接口，注册时用于选择机构。"""
    return organization_service.list_organizations(db)


@router.get("/{organization_id}", response_model=ObjectResponse)
def get_organization(organization_id: int, db: Session = Depends(get_db)) -> ObjectResponse:
    return organization_service.get_detail(db, organization_id=organization_id)


@router.post("", response_model=ObjectResponse)
def create_organization(
    payload: OrganizationCreateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return organization_service.create(db, payload=payload.model_dump(mode="json", exclude_none=True))


@router.put("/{organization_id}", response_model=ObjectResponse)
def update_organization(
    organization_id: int,
    payload: OrganizationUpdateRequest,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return organization_service.update(
        db,
        organization_id=organization_id,
        changes=payload.model_dump(mode="json", exclude_unset=True),
    )


@router.delete("/{organization_id}", response_model=ObjectResponse)
def delete_organization(
    organization_id: int,
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return organization_service.delete(db, organization_id=organization_id)
