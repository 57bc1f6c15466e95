"""通用响应封装模型。"""

from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ResponseEnvelope(BaseModel, Generic[T]):
    """系统统一的响应外层结构。"""

    msg: str
    data: Optional[T] = None
    code: int


class PageData(BaseModel, Generic[T]):
    total: int
    items: List[T]
    page: int
    page_size: int


ObjectResponse = ResponseEnvelope[Dict[str, Any]]
ListResponse = ResponseEnvelope[List[Dict[str, Any]]]
PageResponse = ResponseEnvelope[PageData[Dict[str, Any]]]


class LocationBody(BaseModel):
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
