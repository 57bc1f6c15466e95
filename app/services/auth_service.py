"""认证服务：封装注册、登录与退出登录等核心业务流程。"""

from typing import Optional

from sqlalchemy.orm import Session

from app.core.constants import (
    ACCESS_TOKEN_TYPE,
    DEFAULT_AFFILIATION_TYPE,
    DEFAULT_USER_ROLE,
    HTTP_STATUS_OK,
    HTTP_STATUS_UNAUTHORIZED,
)
from app.core.exceptions import AppException, UniquenessConflictError
from app.core.logger import logger
from app.core.responses import create_response
from app.core.security import create_access_token, get_password_hash, verify_password
from app.core.session import create_session, delete_session, session_ttl_seconds
from app.crud.users import user_crud
from app.models.user import User
from app.services.user_service import serialize_user

LOGIN_FAILED_MESSAGE = "邮箱或密码错误"
DUPLICATE_ACCOUNT_MESSAGE = "该邮箱或手机号已被注册"


class AuthService:
    """负责处理用户注册与登录流程，并保持逻辑聚合。"""

    def register_user(
        self,
        db: Session,
        *,
        name: str,
        surname: str,
        email: str,
        password: str,
        phone: str,
        organization_name: Optional[str] = None,
        affiliation_type: Optional[str] = None,
        position: Optional[str] = None,
    ) -> dict:
        """创建新用户（角色为待审核），并直接为其签发登录令牌。"""
        payload = {
            "name": name,
            "surname": surname,
            "email": email,
            "phone": phone,
            "password": get_password_hash(password),
            "role": DEFAULT_USER_ROLE,
            "declared_affiliation": {
                "organization_name": organization_name,
                "affiliation_type": affiliation_type or DEFAULT_AFFILIATION_TYPE,
                "position": position,
            },
        }
        try:
            user = user_crud.create(db, payload)
        except UniquenessConflictError as exc:
            logger.warning("Registration rejected for %s: duplicate %s", email, ", ".join(exc.fields))
            raise UniquenessConflictError(exc.fields, msg=DUPLICATE_ACCOUNT_MESSAGE) from exc

        logger.info("Registered user #%s (%s)", user.id, user.email)
        data = self._issue_token(user)
        return create_response("注册成功", data, HTTP_STATUS_OK)

    def login(self, db: Session, *, email: str, password: str) -> dict:
        """校验用户凭证并签发访问令牌；已删除用户与密码错误返回相同提示。"""
        user = user_crud.get_by_email(db, email)
        if user is None or not verify_password(password, user.hashed_password):
            logger.warning("Login failed for %s", email)
            raise AppException(msg=LOGIN_FAILED_MESSAGE, code=HTTP_STATUS_UNAUTHORIZED)

        data = self._issue_token(user)
        logger.info("User #%s logged in", user.id)
        return create_response("登录成功", data, HTTP_STATUS_OK)

    def logout(self, session_id: Optional[str]) -> dict:
        if session_id:
            delete_session(session_id)
        return create_response("退出登录成功", None, HTTP_STATUS_OK)

    def _issue_token(self, user: User) -> dict:
        session_id = create_session(user.id, session_ttl_seconds())
        access_token = create_access_token({"user_id": user.id, "sid": session_id})
        return {
            "access_token": access_token,
            "token_type": ACCESS_TOKEN_TYPE,
            "user": serialize_user(user),
        }


auth_service = AuthService()
