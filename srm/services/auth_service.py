"""
登录和密码管理
"""

from typing import Tuple

from srm.auth import create_access_token
from srm.config import USER_STATUS_DISABLED
from srm.exceptions import InvalidCredentials, AccountDisabled
from srm.logger import get_logger
from srm.models import User
from srm.permissions import Operation, authorize
from srm.services.base import BaseService
from srm.utils import hash_password, verify_password

logger = get_logger(__name__)


class AuthService(BaseService):

    def login(self, username: str, password: str) -> Tuple[str, User]:
        """
        校验用户名密码并签发token

        Args:
            username: 用户名
            password: 密码

        Returns:
            Tuple[str, User]: token和用户对象

        Raises:
            InvalidCredentials: 用户不存在或密码错误
            AccountDisabled: 账号已停用
        """
        user = self.db.query(User).filter(User.username == username).first()
        if not user:
            logger.warning("登录失败: 用户名或密码错误", extra={"username": username})
            raise InvalidCredentials()

        # 停用账号无论密码是否正确都返回已停用
        if user.status == USER_STATUS_DISABLED:
            logger.warning(f"登录失败: 账号已停用 {username}", extra={"user_id": user.id})
            raise AccountDisabled()

        if not verify_password(password, user.password_hash):
            logger.warning("登录失败: 用户名或密码错误", extra={"username": username})
            raise InvalidCredentials()

        token = create_access_token(user)
        logger.info(
            f"用户登录成功: {user.username} (角色: {user.role})",
            extra={"user_id": user.id, "role": user.role}
        )
        return token, user

    def change_password(self, user: User, old_password: str, new_password: str):
        """修改当前用户自己的密码"""
        authorize(user, Operation.PASSWORD_CHANGE)
        if not verify_password(old_password, user.password_hash):
            raise InvalidCredentials("原密码错误")

        with self.transaction("修改密码"):
            user.password_hash = hash_password(new_password)

        logger.info(f"用户修改密码: {user.username}", extra={"user_id": user.id})
