"""
权限控制

按(角色, 操作)统一判断权限。供应商只能操作属于自己的数据，
需要归属校验的操作在调用时传入owner_id。
"""

import enum
from typing import Optional

from srm.config import ROLE_ADMIN, ROLE_SUPPLIER
from srm.exceptions import Forbidden


class Operation(str, enum.Enum):
    PRODUCT_VIEW = "product:view"
    PRODUCT_EDIT = "product:edit"
    ORDER_CREATE = "order:create"
    ORDER_VIEW = "order:view"
    ORDER_SHIP = "order:ship"
    ORDER_RECEIVE = "order:receive"
    STATS_ADMIN = "stats:admin"
    STATS_SUPPLIER = "stats:supplier"
    PROFILE_VIEW = "profile:view"
    PROFILE_EDIT = "profile:edit"
    SUPPLIER_LIST = "supplier:list"
    USER_MANAGE = "user:manage"
    PASSWORD_CHANGE = "password:change"


ROLE_PERMISSIONS = {
    ROLE_ADMIN: frozenset({
        Operation.PRODUCT_VIEW,
        Operation.PRODUCT_EDIT,
        Operation.ORDER_CREATE,
        Operation.ORDER_VIEW,
        Operation.ORDER_RECEIVE,
        Operation.STATS_ADMIN,
        Operation.STATS_SUPPLIER,
        Operation.PROFILE_VIEW,
        Operation.PROFILE_EDIT,
        Operation.SUPPLIER_LIST,
        Operation.USER_MANAGE,
        Operation.PASSWORD_CHANGE,
    }),
    ROLE_SUPPLIER: frozenset({
        Operation.PRODUCT_VIEW,
        Operation.ORDER_VIEW,
        Operation.ORDER_SHIP,
        Operation.STATS_SUPPLIER,
        Operation.PROFILE_VIEW,
        Operation.PROFILE_EDIT,
        Operation.SUPPLIER_LIST,
        Operation.PASSWORD_CHANGE,
    }),
}

# 这些角色在执行操作时只能访问自己的数据
OWNER_SCOPED_ROLES = frozenset({ROLE_SUPPLIER})


def is_allowed(user, operation: Operation, owner_id: Optional[int] = None) -> bool:
    """
    判断用户是否可以执行操作

    Args:
        user: 当前用户（需要id和role属性）
        operation: 操作
        owner_id: 目标数据所属的用户ID，不涉及具体数据时为None

    Returns:
        bool: 是否允许

    使用样例:
        if is_allowed(current_user, Operation.ORDER_SHIP, owner_id=order.supplier_id):
            ...
    """
    if user is None:
        return False
    if operation not in ROLE_PERMISSIONS.get(user.role, frozenset()):
        return False
    if owner_id is not None and user.role in OWNER_SCOPED_ROLES:
        return user.id == owner_id
    return True


def authorize(user, operation: Operation, owner_id: Optional[int] = None):
    """
    校验权限，不允许时抛出Forbidden

    使用样例:
        authorize(current_user, Operation.ORDER_RECEIVE)
    """
    if not is_allowed(user, operation, owner_id):
        raise Forbidden()
