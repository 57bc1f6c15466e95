"""选项表路由：前端表单的下拉选项统一从这里获取。"""

from fastapi import APIRouter

from app.api.v1.schemas.common import ObjectResponse, ResponseEnvelope
from app.services.options_service import options_service

router = APIRouter(prefix="/options", tags=["options"])


@router.get("", response_model=ObjectResponse)
def list_options() -> ObjectResponse:
    return options_service.list_all()


@router.get("/{name}", response_model=ResponseEnvelope[list[dict[str, str]]])
def get_options(name: str) -> ResponseEnvelope[list[dict[str, str]]]:
    return options_service.list_by_name(name)
