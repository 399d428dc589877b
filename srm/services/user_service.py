"""
账号管理
"""

from typing import List

from srm.config import (
    ROLE_ADMIN, ROLE_SUPPLIER, USER_STATUS_ACTIVE,
    DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_NICKNAME,
    DEFAULT_SUPPLIER_USERNAME, DEFAULT_SUPPLIER_PASSWORD, DEFAULT_SUPPLIER_NICKNAME
)
from srm.exceptions import Conflict, Forbidden, InvalidRequest, NotFound
from srm.logger import get_logger
from srm.models import User
from srm.permissions import Operation, authorize
from srm.schemas import SupplierAccountCreate, UserAdminUpdate
from srm.services.base import BaseService
from srm.utils import hash_password

logger = get_logger(__name__)


class UserService(BaseService):

    def list_suppliers(self, user: User) -> List[User]:
        """启用状态的供应商，用于下单时选择"""
        authorize(user, Operation.SUPPLIER_LIST)
        return self.db.query(User).filter(
            User.role == ROLE_SUPPLIER,
            User.status == USER_STATUS_ACTIVE
        ).order_by(User.id).all()

    def list_users(self, user: User) -> List[User]:
        authorize(user, Operation.USER_MANAGE)
        return self.db.query(User).filter(User.role != ROLE_ADMIN).order_by(User.id).all()

    def create_supplier(self, user: User, data: SupplierAccountCreate) -> User:
        """
        创建供应商账号（仅管理员）

        Raises:
            Conflict: 用户名已存在
        """
        authorize(user, Operation.USER_MANAGE)

        if self.db.query(User).filter(User.username == data.username).first():
            raise Conflict("用户名已存在")

        new_user = User(
            username=data.username,
            password_hash=hash_password(data.password),
            role=ROLE_SUPPLIER,
            nickname=data.nickname,
            status=USER_STATUS_ACTIVE
        )
        with self.transaction("创建账号"):
            self.db.add(new_user)
        self.db.refresh(new_user)

        logger.info(
            f"供应商账号创建成功: {new_user.username} (ID: {new_user.id})",
            extra={"user_id": user.id, "new_user_id": new_user.id}
        )
        return new_user

    def update_user(self, user: User, data: UserAdminUpdate) -> User:
        """
        管理员重置密码或启停账号，账号不会被删除，角色不可修改

        Raises:
            InvalidRequest: 未提供任何修改项
            NotFound: 用户不存在
            Forbidden: 目标是管理员账号
        """
        authorize(user, Operation.USER_MANAGE)

        if data.password is None and data.status is None:
            raise InvalidRequest("请提供新密码或账号状态")

        target = self.db.query(User).filter(User.id == data.user_id).first()
        if not target:
            raise NotFound("用户不存在")
        if target.role == ROLE_ADMIN:
            raise Forbidden("不能修改管理员账号")

        with self.transaction("更新账号"):
            if data.password is not None:
                target.password_hash = hash_password(data.password)
            if data.status is not None:
                target.status = data.status

        logger.info(
            f"账号已更新: {target.username}, 重置密码={data.password is not None}, 状态={target.status}",
            extra={"user_id": user.id, "target_user_id": target.id}
        )
        return target

    def ensure_default_accounts(self):
        """没有管理员时创建默认管理员和示范供应商账号"""
        if self.db.query(User).filter(User.role == ROLE_ADMIN).first():
            return

        with self.transaction("创建默认账号"):
            self.db.add(User(
                username=DEFAULT_ADMIN_USERNAME,
                password_hash=hash_password(DEFAULT_ADMIN_PASSWORD),
                role=ROLE_ADMIN,
                nickname=DEFAULT_ADMIN_NICKNAME,
                status=USER_STATUS_ACTIVE
            ))
            if not self.db.query(User).filter(User.username == DEFAULT_SUPPLIER_USERNAME).first():
                self.db.add(User(
                    username=DEFAULT_SUPPLIER_USERNAME,
                    password_hash=hash_password(DEFAULT_SUPPLIER_PASSWORD),
                    role=ROLE_SUPPLIER,
                    nickname=DEFAULT_SUPPLIER_NICKNAME,
                    status=USER_STATUS_ACTIVE
                ))
        logger.info(f"默认账号已创建: {DEFAULT_ADMIN_USERNAME}, {DEFAULT_SUPPLIER_USERNAME}")
