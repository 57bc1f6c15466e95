"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from collections.abc import Callable, Generator
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.constants import ACCESS_TOKEN_TYPE
from app.core.enums import RoleEnum
from app.core.guards import forbid_unless_roles
from app.core.logger import logger
from app.core.security import decode_token
from app.core.session import session_ttl_seconds, touch_session
from app.crud.users import user_crud
from app.db import session as db_session
from app.models.user import User

security_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """生成一个数据库会话，并在请求结束后自动关闭。"""
    db = db_session.SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)


def _extract_token(request: Request, credentials: Optional[HTTPAuthorizationCredentials]) -> str:
    """优先读取 ``Authorization`` 头部，其次读取 HTTP-only Cookie。"""
    if credentials is not None:
        if credentials.scheme.lower() != ACCESS_TOKEN_TYPE:
            raise _unauthorized("认证类型无效")
        return credentials.credentials
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        raise _unauthorized("缺少认证信息")
    return token


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    db: Session = Depends(get_db),
) -> User:
    """解析令牌并返回当前认证用户，不存在、已删除或会话失效时抛出 401。"""
    token = _extract_token(request, credentials)

    payload = decode_token(token)
    if payload is None:
        raise _unauthorized("Token 无效或已过期")

    user_id = payload.get("user_id")
    session_id = payload.get("sid")
    if user_id is None or session_id is None:
        raise _unauthorized("Token 无效")

    user = user_crud.get(db, user_id)
    if user is None:
        logger.warning("Rejected token for missing or deleted user #%s", user_id)
        raise _unauthorized("用户不存在")

    if not touch_session(session_id, user.id, session_ttl_seconds()):
        raise _unauthorized("Token 无效或已过期")

    # 同一请求内的后续依赖与路由（例如退出登录）从 request.state 读取会话 ID
    request.state.session_id = session_id
    return user


def get_current_session_id(request: Request, _: User = Depends(get_current_user)) -> str:
    """返回当前令牌对应的服务端会话 ID，需先完成认证。"""
    return request.state.session_id


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """确保已认证用户仍可访问；已软删除的用户在查询阶段就被过滤掉。"""
    if current_user.is_deleted:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="用户已被删除")
    return current_user


def require_roles(*roles: RoleEnum) -> Callable[..., User]:
    """生成仅允许指定角色访问的依赖。"""

    def _dependency(current_user: User = Depends(get_current_active_user)) -> User:
        forbid_unless_roles(current_user, roles)
        return current_user

    return _dependency
