"""车辆相关路由定义。"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.v1.schemas.common import ListResponse, ObjectResponse, PageResponse
from app.api.v1.schemas.vehicles import VehicleCreateRequest, VehicleUpdateRequest
from app.core.dependencies import get_db, require_roles
from app.core.enums import RoleEnum, VehicleStatusEnum, VehicleTypeEnum
from app.models.user import User
from app.services.vehicle_service import vehicle_service

router = APIRouter(prefix="/vehicles", tags=["vehicles"])

_vehicle_managers = require_roles(RoleEnum.VEHICLE_OWNER, RoleEnum.COORDINATOR)


@router.post("", response_model=ObjectResponse)
def register_vehicle(
    payload: VehicleCreateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(_vehicle_managers),
) -> ObjectResponse:
    return vehicle_service.register(
        db,
        payload=payload.model_dump(mode="json", exclude_none=True),
        current_user=current_user,
    )


@router.get("/mine", response_model=ListResponse)
def list_my_vehicles(
    db: Session = Depends(get_db),
    current_user: User = Depends(_vehicle_managers),
) -> ListResponse:
    return vehicle_service.list_mine(db, current_user=current_user)


@router.get("", response_model=PageResponse)
def list_vehicles(
    vehicle_type: Optional[VehicleTypeEnum] = Query(None, description="车型"),
    is_available: Optional[bool] = Query(None, description="是否可调度"),
    status: Optional[VehicleStatusEnum] = Query(None, description="启用状态"),
    page: int = Query(1, ge=1, description="页码，从 1 开始"),
    page_size: int = Query(20, ge=1, le=200, description="每页数量"),
    db: Session = Depends(get_db),
    _: User = Depends(require_roles(RoleEnum.COORDINATOR)),
) -> PageResponse:
    return vehicle_service.list_vehicles(
        db,
        vehicle_type=vehicle_type,
        is_available=is_available,
        status=status,
        page=page,
        page_size=page_size,
    )


@router.get("/{vehicle_id}", response_model=ObjectResponse)
def get_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_vehicle_managers),
) -> ObjectResponse:
    return vehicle_service.get_detail(db, vehicle_id=vehicle_id, current_user=current_user)


@router.put("/{vehicle_id}", response_model=ObjectResponse)
def update_vehicle(
    vehicle_id: int,
    payload: VehicleUpdateRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(_vehicle_managers),
) -> ObjectResponse:
    return vehicle_service.update(
        db,
        vehicle_id=vehicle_id,
        changes=payload.model_dump(mode="json", exclude_unset=True),
        current_user=current_user,
    )


@router.delete("/{vehicle_id}", response_model=ObjectResponse)
def delete_vehicle(
    vehicle_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(_vehicle_managers),
) -> ObjectResponse:
    return vehicle_service.delete(db, vehicle_id=vehicle_id, current_user=current_user)
