"""车辆需求相关路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ListResponse, ObjectResponse, PageResponse
from app.api.v1.schemas.requests import RequestCreateRequest, RequestStatusUpdateRequest
from app.core.dependencies import get_db, require_roles
from app.core.enums import RequestStatusEnum, RoleEnum
from app.models.user import User
from app.services.request_service import request_service

router = APIRouter(prefix="/requests", tags=["requests"])

_requesters = require_roles(RoleEnum.REQUESTER)
_participants = require_roles(RoleEnum.REQUESTER, RoleEnum.COORDINATOR)


@router.post("", response_model=ObjectResponse)
def create_request(
    payload: RequestCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(_requesters),
) -> ObjectResponse:
    return request_service.create(
        db,
        payload=payload.model_dump(mode="json", exclude_none=True),
        current_user=current_user,
    )


@router.get("/mine", response_model=ListResponse)
def list_my_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(_requesters),
) -> ListResponse:
    return request_service.list_mine(db, current_user=current_user)


@router.get("", response_model=PageResponse)
def list_requests(
    status: Optional[RequestStatusEnum] = Query(None, description="需求状态"),
    page: int = Query(1, ge=1, description="页码，从 1 开始"),
    page_size: int = Query(20, ge=1, le=200, description="每页数量"),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> PageResponse:
    return request_service.list_requests(db, status=status, page=page, page_size=page_size)


@router.get("/{request_id}", response_model=ObjectResponse)
def get_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_participants),
) -> ObjectResponse:
    return request_service.get_detail(db, request_id=request_id, current_user=current_user)


@router.put("/{request_id}/status", response_model=ObjectResponse)
def change_request_status(
    request_id: int,
    payload: RequestStatusUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> ObjectResponse:
    return request_service.change_status(db, request_id=request_id, status=payload.status, operator=current_user)


@router.post("/{request_id}/cancel", response_model=ObjectResponse)
def cancel_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_requesters),
) -> ObjectResponse:
    return request_service.cancel(db, request_id=request_id, current_user=current_user)


@router.delete("/{request_id}", response_model=ObjectResponse)
def delete_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_participants),
) -> ObjectResponse:
    return request_service.delete(db, request_id=request_id, current_user=current_user)
