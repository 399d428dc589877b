"""
商品管理路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from srm.database import get_db
from srm.models import User
from srm.schemas import ProductUpsert, ProductResponse
from srm.auth import get_current_user
from srm.services.product_service import ProductService
from typing import List

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductResponse])
async def list_products(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    获取商品库全部商品

    使用样例:
        GET /api/products
    """
    products = ProductService(db).list_products(current_user)
    return [ProductResponse.model_validate(p) for p in products]


@router.post("", response_model=ProductResponse)
async def upsert_product(
    product_data: ProductUpsert,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    新增或更新商品（按SKU，管理员）

    Args:
        product_data: 商品信息
        current_user: 当前登录用户
        db: 数据库会话

    Returns:
        ProductResponse: 保存后的商品

    使用样例:
        POST /api/products
        {
            "sku": "SKU-001",
            "name": "商品名",
            "spec": "500g/袋",
            "unit_price": 10.5
        }
    """
    product = ProductService(db).upsert_product(current_user, product_data)
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}")
async def delete_product(
    product_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    删除商品（管理员）

    使用样例:
        DELETE /api/products/1
    """
    ProductService(db).delete_product(current_user, product_id)
    return {"success": True, "message": "商品删除成功"}
