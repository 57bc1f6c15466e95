"""异常处理模块：定义统一的业务异常层级与响应格式。

异常层级：
- AppException：所有业务异常的基类，携带 ``msg/code/data``；
- ShapeValidationError：字段必填/类型/枚举校验失败，``data.field_errors`` 按字段列出原因；
- ReferenceFormatError：引用字段格式非法，属于形状校验失败的一种；
- UniquenessConflictError：写入违反唯一约束（邮箱、手机号、车牌）；
- NotFoundError：按标识查询不到可见（未软删除）的记录。
"""

from typing import Any, Iterable, Mapping, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.constants import (
    HTTP_STATUS_CONFLICT,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_NOT_FOUND,
    HTTP_STATUS_UNPROCESSABLE_ENTITY,
)
from app.core.logger import logger
from app.validation.errors import field_errors_from_pydantic


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data: Any = None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.msg = msg
        self.code = code
        self.data = data


class ShapeValidationError(AppException):
    """实体形状校验失败，一次性列出所有失败字段。"""

    def __init__(self, field_errors: Mapping[str, str], msg: str = "数据校验失败") -> None:
        self.field_errors = dict(field_errors)
        super().__init__(msg, HTTP_STATUS_UNPROCESSABLE_ENTITY, {"field_errors": self.field_errors})


class ReferenceFormatError(ShapeValidationError):
    """引用字段不是合法的标识。"""

    def __init__(self, field_errors: Mapping[str, str], msg: str = "引用标识格式无效") -> None:
        super().__init__(field_errors, msg)


class UniquenessConflictError(AppException):
    """唯一约束冲突，与形状校验错误相互独立。"""

    def __init__(self, fields: Iterable[str], msg: str = "记录已存在") -> None:
        self.fields = list(fields)
        super().__init__(msg, HTTP_STATUS_CONFLICT, {"fields": self.fields})


class NotFoundError(AppException):
    """按标识查询不到可见记录。"""

    def __init__(self, msg: str = "记录不存在或已删除", data: Optional[Any] = None) -> None:
        super().__init__(msg, HTTP_STATUS_NOT_FOUND, data)


def _envelope(msg: str, code: int, data: Any = None) -> dict[str, Any]:
    return {"msg": msg, "data": data, "code": code}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 ``HTTPException``（含 ``AppException``）转换为统一响应格式。"""
    msg = getattr(exc, "msg", None) or exc.detail
    payload = _envelope(msg, exc.status_code, getattr(exc, "data", None))
    return JSONResponse(status_code=exc.status_code, content=payload, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:  # pragma: no cover - framework glue
    """请求体校验失败时，与实体校验层输出相同的字段错误映射。"""
    field_errors = field_errors_from_pydantic(exc.errors(), strip_prefixes=("body", "query", "path"))
    return JSONResponse(
        status_code=HTTP_STATUS_UNPROCESSABLE_ENTITY,
        content=_envelope("请求参数验证失败", HTTP_STATUS_UNPROCESSABLE_ENTITY, {"field_errors": field_errors}),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：记录异常堆栈并返回标准的 500 响应结构。"""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=HTTP_STATUS_INTERNAL_SERVER_ERROR,
        content=_envelope("服务器内部错误", HTTP_STATUS_INTERNAL_SERVER_ERROR),
    )
