"""认证相关路由定义。"""

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from app.api.v1.schemas.auth import LoginRequest, LogoutResponse, RegisterRequest, TokenResponse
from app.core.config import get_settings
from app.core.dependencies import get_current_active_user, get_current_session_id, get_db
from app.core.session import session_ttl_seconds
from app.models.user import User
from app.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


def _set_auth_cookie(response: Response, token: str) -> None:
    """令牌同时写入 HTTP-only Cookie，浏览器端无需自行保存。"""
    settings = get_settings()
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        max_age=session_ttl_seconds(),
        httponly=True,
        samesite="strict",
        secure=not settings.is_development,
    )


@router.post("/register", response_model=TokenResponse)
def register(payload: RegisterRequest, response: Response, db: Session = Depends(get_db)) -> TokenResponse:
    """调用认证服务完成注册，注册成功即视为已登录。"""
    result = auth_service.register_user(
        db,
        name=payload.name,
        surname=payload.surname,
        email=payload.email,
        password=payload.password,
        phone=payload.phone,
        organization_name=payload.organization_name,
        affiliation_type=payload.affiliation_type.value if payload.affiliation_type else None,
        position=payload.position,
    )
    _set_auth_cookie(response, result["data"]["access_token"])
    return result


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, response: Response, db: Session = Depends(get_db)) -> TokenResponse:
    """校验凭证并签发访问令牌。"""
    result = auth_service.login(db, email=payload.email, password=payload.password)
    _set_auth_cookie(response, result["data"]["access_token"])
    return result


@router.post("/logout", response_model=LogoutResponse)
def logout(
    response: Response,
    session_id: str = Depends(get_current_session_id),
    _: User = Depends(get_current_active_user),
) -> LogoutResponse:
    """删除服务端会话并清除 Cookie，旧令牌随即失效。"""
    response.delete_cookie(get_settings().auth_cookie_name)
    return auth_service.logout(session_id)
