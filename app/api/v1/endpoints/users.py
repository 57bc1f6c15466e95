"""用户相关路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ObjectResponse, PageResponse
from app.api.v1.schemas.users import RoleChangeRequest
from app.core.dependencies import get_current_active_user, get_db, require_roles
from app.core.enums import RoleEnum
from app.models.user import User
from app.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=ObjectResponse)
def read_current_user(current_user: User = Depends(get_current_active_user)) -> ObjectResponse:
    """返回当前登录用户的资料，不含密码。"""
    return user_service.build_user_profile(current_user)


@router.get("", response_model=PageResponse)
def list_users(
    role: Optional[RoleEnum] = Query(None, description="按角色筛选"),
    page: int = Query(1, ge=1, description="页码，从 1 开始"),
    page_size: int = Query(20, ge=1, le=200, description="每页数量"),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> PageResponse:
    return user_service.list_users(db, role=role, page=page, page_size=page_size)


@router.put("/{user_id}/role", response_model=ObjectResponse)
def change_user_role(
    user_id: int,
    payload: RoleChangeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return user_service.change_role(
        db,
        user_id=user_id,
        role=payload.role,
        organization_id=payload.organization_id,
        operator=current_user,
    )


@router.delete("/{user_id}", response_model=ObjectResponse)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return user_service.delete_user(db, user_id=user_id, operator=current_user)
