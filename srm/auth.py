"""
认证和token管理
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from srm.config import JWT_SECRET_KEY, JWT_ALGORITHM, TOKEN_EXPIRE_SECONDS, USER_STATUS_DISABLED
from srm.database import get_db
from srm.exceptions import Unauthenticated, InvalidToken, AccountDisabled
from srm.logger import get_logger
from srm.models import User
from srm.permissions import Operation, authorize

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    创建访问token

    Args:
        user: 用户对象
        expires_delta: 有效期，默认24小时

    Returns:
        str: 签名后的token

    使用样例:
        token = create_access_token(user)
    """
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(seconds=TOKEN_EXPIRE_SECONDS)
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "nickname": user.nickname,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    """
    校验并解析token

    Raises:
        InvalidToken: 签名错误、格式错误或已过期
    """
    try:
        payload = jwt.decode(token, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError as e:
        raise InvalidToken("登录已过期，请重新登录") from e
    except jwt.PyJWTError as e:
        raise InvalidToken() from e
    if not str(payload.get("sub", "")).isdigit():
        raise InvalidToken()
    return payload


def authenticate(token: Optional[str], db: Session) -> User:
    """
    根据token获取当前用户

    Args:
        token: 请求携带的token
        db: 数据库会话

    Returns:
        User: 当前用户

    Raises:
        Unauthenticated: 未携带token
        InvalidToken: token无效或用户不存在
        AccountDisabled: 账号已停用
    """
    if not token:
        raise Unauthenticated()

    payload = decode_access_token(token)
    user = db.query(User).filter(User.id == int(payload["sub"])).first()
    if not user:
        raise InvalidToken()
    if user.status == USER_STATUS_DISABLED:
        logger.warning(f"已停用账号访问被拒绝: {user.username}", extra={"user_id": user.id})
        raise AccountDisabled()
    return user


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> User:
    """
    获取当前登录用户（依赖注入）

    使用样例:
        @router.get("/api/protected")
        def protected_route(current_user: User = Depends(get_current_user)):
            return {"user": current_user.username}
    """
    token = credentials.credentials if credentials else None
    return authenticate(token, db)


def require_operation(operation: Operation):
    """
    要求当前用户具备某项操作权限（依赖注入）

    使用样例:
        @router.get("/api/admin/users")
        def admin_route(current_user: User = Depends(require_operation(Operation.USER_MANAGE))):
            ...
    """
    def dependency(user: User = Depends(get_current_user)) -> User:
        authorize(user, operation)
        return user
    return dependency


require_admin = require_operation(Operation.USER_MANAGE)
