"""
账号管理功能测试
"""

from conftest import SUPPLIER, OTHER_SUPPLIER


def test_list_users_excludes_admin(client, admin_headers):
    users = client.get("/api/admin/users", headers=admin_headers).json()
    usernames = [u["username"] for u in users]
    assert usernames == [SUPPLIER[0], OTHER_SUPPLIER[0]]
    assert all(u["role"] == "supplier" for u in users)


def test_create_supplier(client, admin_headers, login):
    """管理员创建供应商账号后可以登录"""
    response = client.post(
        "/api/admin/users",
        json={"username": "supplier03", "password": "pass03", "nickname": "第三供应商"},
        headers=admin_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "supplier"
    assert data["status"] == "active"

    assert login("supplier03", "pass03")


def test_create_duplicate_username(client, admin_headers):
    response = client.post(
        "/api/admin/users",
        json={"username": SUPPLIER[0], "password": "x", "nickname": "重复"},
        headers=admin_headers
    )
    assert response.status_code == 409
    assert response.json()["error_type"] == "Conflict"


def test_supplier_cannot_manage_users(client, supplier_headers, other_supplier):
    assert client.get("/api/admin/users", headers=supplier_headers).status_code == 403
    response = client.post(
        "/api/admin/users/update",
        json={"user_id": other_supplier.id, "status": "disabled"},
        headers=supplier_headers
    )
    assert response.status_code == 403


def test_reset_password(client, admin_headers, supplier, login):
    response = client.post(
        "/api/admin/users/update",
        json={"user_id": supplier.id, "password": "reset123"},
        headers=admin_headers
    )
    assert response.status_code == 200
    assert login(SUPPLIER[0], "reset123")

    old = client.post("/api/login", json={"username": SUPPLIER[0], "password": SUPPLIER[1]})
    assert old.status_code == 401


def test_disable_and_enable(client, admin_headers, supplier, login):
    """停用账号后不能登录，也不出现在下单供应商列表中"""
    client.post(
        "/api/admin/users/update",
        json={"user_id": supplier.id, "status": "disabled"},
        headers=admin_headers
    )
    response = client.post("/api/login", json={"username": SUPPLIER[0], "password": SUPPLIER[1]})
    assert response.status_code == 403

    options = client.get("/api/suppliers-list", headers=admin_headers).json()
    assert supplier.id not in [o["id"] for o in options]

    # 停用账号仍在账号列表中
    users = client.get("/api/admin/users", headers=admin_headers).json()
    assert any(u["id"] == supplier.id and u["status"] == "disabled" for u in users)

    client.post(
        "/api/admin/users/update",
        json={"user_id": supplier.id, "status": "active"},
        headers=admin_headers
    )
    assert login(*SUPPLIER)


def test_suppliers_list(client, supplier_headers, supplier, other_supplier):
    options = client.get("/api/suppliers-list", headers=supplier_headers).json()
    assert options == [
        {"id": supplier.id, "nickname": "示范供应商"},
        {"id": other_supplier.id, "nickname": "第二供应商"},
    ]


def test_cannot_update_admin(client, admin_headers, admin):
    response = client.post(
        "/api/admin/users/update",
        json={"user_id": admin.id, "status": "disabled"},
        headers=admin_headers
    )
    assert response.status_code == 403


def test_update_requires_change(client, admin_headers, supplier):
    response = client.post(
        "/api/admin/users/update", json={"user_id": supplier.id}, headers=admin_headers
    )
    assert response.status_code == 400
    assert response.json()["error_type"] == "InvalidRequest"


def test_update_unknown_user(client, admin_headers):
    response = client.post(
        "/api/admin/users/update", json={"user_id": 9999, "status": "active"}, headers=admin_headers
    )
    assert response.status_code == 404


def test_invalid_status_value(client, admin_headers, supplier):
    response = client.post(
        "/api/admin/users/update",
        json={"user_id": supplier.id, "status": "deleted"},
        headers=admin_headers
    )
    assert response.status_code == 422
