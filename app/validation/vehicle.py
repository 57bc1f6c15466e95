"""车辆实体的形状校验。"""

from typing import Annotated, Optional

from pydantic import Field

from app.core.constants import DEFAULT_VEHICLE_AVAILABILITY, DEFAULT_VEHICLE_STATUS
from app.core.enums import UsagePurposeEnum, VehicleStatusEnum, VehicleTypeEnum
from app.validation.common import NonEmptyStr, OptionalLocation, Reference, ShapeModel


class VehicleShape(ShapeModel):
    plate: NonEmptyStr
    vehicle_type: VehicleTypeEnum
    usage_purpose: Optional[UsagePurposeEnum] = None
    capacity: Annotated[int, Field(gt=0)]
    is_available: bool = DEFAULT_VEHICLE_AVAILABILITY
    status: VehicleStatusEnum = DEFAULT_VEHICLE_STATUS
    location: Optional[OptionalLocation] = None
    organization_id: Optional[Reference] = None
    owner_id: Optional[Reference] = None
    is_deleted: bool = False
