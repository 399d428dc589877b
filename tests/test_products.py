"""
商品管理功能测试
"""

from types import SimpleNamespace

import pytest
from sqlalchemy.dialects import postgresql, sqlite
from srm.exceptions import NotFound, StoreFailure
from srm.models import Product
from srm.schemas import ProductUpsert
from srm.services.base import BaseService
from srm.services.product_service import ProductService


def upsert(client, headers, **fields):
    payload = {"sku": "SKU-001", "name": "测试商品", "spec": "500g/袋", "unit_price": 10.5}
    payload.update(fields)
    return client.post("/api/products", json=payload, headers=headers)


def test_upsert_creates_product(client, admin_headers):
    """测试新增商品"""
    response = upsert(client, admin_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["sku"] == "SKU-001"
    assert data["unit_price"] == 10.5


def test_upsert_is_keyed_by_sku(client, admin_headers):
    """相同SKU再次提交时更新而不是新增"""
    first = upsert(client, admin_headers).json()
    again = upsert(client, admin_headers).json()
    updated = upsert(client, admin_headers, name="新名称", unit_price=12).json()

    assert again["id"] == first["id"]
    assert updated["id"] == first["id"]
    assert updated["name"] == "新名称"
    assert updated["unit_price"] == 12

    products = client.get("/api/products", headers=admin_headers).json()
    assert len(products) == 1


def test_list_products_for_supplier(client, admin_headers, supplier_headers):
    upsert(client, admin_headers, sku="B")
    upsert(client, admin_headers, sku="A")
    products = client.get("/api/products", headers=supplier_headers).json()
    assert [p["sku"] for p in products] == ["A", "B"]


def test_supplier_cannot_edit_catalog(client, admin_headers, supplier_headers):
    assert upsert(client, supplier_headers).status_code == 403
    product = upsert(client, admin_headers).json()
    assert client.delete(f"/api/products/{product['id']}", headers=supplier_headers).status_code == 403


def test_negative_price_rejected(client, admin_headers):
    assert upsert(client, admin_headers, unit_price=-1).status_code == 422


def test_delete_product_keeps_orders(client, admin_headers, supplier):
    """删除商品后商品列表不再包含该SKU，已有订单不受影响"""
    product = upsert(client, admin_headers).json()
    order = client.post(
        "/api/orders",
        json={"sku": "SKU-001", "quantity": 3, "supplier_id": supplier.id},
        headers=admin_headers
    ).json()

    response = client.delete(f"/api/products/{product['id']}", headers=admin_headers)
    assert response.status_code == 200

    skus = [p["sku"] for p in client.get("/api/products", headers=admin_headers).json()]
    assert "SKU-001" not in skus

    rows = client.get("/api/orders", headers=admin_headers).json()
    assert rows[0]["id"] == order["id"]
    assert rows[0]["sku"] == "SKU-001"
    assert rows[0]["name"] == "测试商品"
    assert rows[0]["spec"] == "500g/袋"
    assert rows[0]["unit_price"] == 10.5
    assert rows[0]["total_price"] == 31.5


def test_delete_missing_product(client, admin_headers):
    response = client.delete("/api/products/9999", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["error_type"] == "NotFound"


def test_service_upsert_and_delete(db, admin):
    service = ProductService(db)
    product = service.upsert_product(admin, ProductUpsert(sku="S-1", name="甲", unit_price=1))
    assert product.spec is None

    service.delete_product(admin, product.id)
    assert service.list_products(admin) == []
    with pytest.raises(NotFound):
        service.delete_product(admin, product.id)


def test_upsert_statement_follows_dialect(db):
    """upsert语句按数据库方言构造，不支持的数据库直接报错"""
    table = Product.__table__
    assert isinstance(BaseService(db).upsert_insert(table), sqlite.Insert)

    def session_for(dialect):
        bind = SimpleNamespace(dialect=SimpleNamespace(name=dialect))
        return SimpleNamespace(get_bind=lambda: bind)

    stmt = BaseService(session_for("postgresql")).upsert_insert(table)
    assert isinstance(stmt, postgresql.Insert)

    with pytest.raises(StoreFailure):
        BaseService(session_for("mysql")).upsert_insert(table)
