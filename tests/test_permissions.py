"""
权限表测试
"""

from types import SimpleNamespace

import pytest
from srm.permissions import Operation, is_allowed, authorize
from srm.exceptions import Forbidden

admin = SimpleNamespace(id=1, role="admin")
supplier = SimpleNamespace(id=2, role="supplier")


@pytest.mark.parametrize("operation", [
    Operation.ORDER_CREATE,
    Operation.ORDER_RECEIVE,
    Operation.PRODUCT_EDIT,
    Operation.STATS_ADMIN,
    Operation.USER_MANAGE,
])
def test_admin_only_operations(operation):
    assert is_allowed(admin, operation)
    assert not is_allowed(supplier, operation)


def test_only_supplier_ships():
    assert is_allowed(supplier, Operation.ORDER_SHIP, owner_id=2)
    assert not is_allowed(admin, Operation.ORDER_SHIP, owner_id=2)


def test_supplier_limited_to_own_rows():
    assert is_allowed(supplier, Operation.ORDER_VIEW, owner_id=2)
    assert not is_allowed(supplier, Operation.ORDER_VIEW, owner_id=3)
    assert not is_allowed(supplier, Operation.PROFILE_EDIT, owner_id=3)
    assert not is_allowed(supplier, Operation.STATS_SUPPLIER, owner_id=3)


def test_admin_not_owner_scoped():
    assert is_allowed(admin, Operation.PROFILE_VIEW, owner_id=2)
    assert is_allowed(admin, Operation.STATS_SUPPLIER, owner_id=3)


def test_unknown_role_and_missing_user():
    assert not is_allowed(SimpleNamespace(id=9, role="guest"), Operation.PRODUCT_VIEW)
    assert not is_allowed(None, Operation.PRODUCT_VIEW)


def test_authorize_raises_forbidden():
    authorize(admin, Operation.USER_MANAGE)
    with pytest.raises(Forbidden):
        authorize(supplier, Operation.USER_MANAGE)
