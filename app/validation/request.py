"""车辆需求（Request）实体的形状校验。"""

from typing import Annotated, ClassVar

from pydantic import ConfigDict, Field

from app.core.constants import DEFAULT_REQUEST_STATUS
from app.core.enums import RequestStatusEnum, VehicleTypeEnum
from app.validation.common import NonEmptyStr, NullAsMissingModel, Reference, RequiredLocation, ShapeModel


class VehicleRequirement(NullAsMissingModel):
    """需求明细行：车型与数量必须同时提供，同一车型可以出现多行。"""

    model_config = ConfigDict(extra="ignore", use_enum_values=True)

    vehicle_type: VehicleTypeEnum
    count: Annotated[int, Field(ge=1)]


class RequestShape(ShapeModel):
    required_groups: ClassVar[tuple[str, ...]] = ("location",)

    title: NonEmptyStr
    description: NonEmptyStr
    requester_id: Reference
    requester_organization_id: Reference
    vehicles: list[VehicleRequirement] = Field(default_factory=list)
    location: RequiredLocation
    status: RequestStatusEnum = DEFAULT_REQUEST_STATUS
    is_deleted: bool = False
