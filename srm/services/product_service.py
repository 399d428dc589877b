"""
商品库管理
"""

from typing import List


from srm.exceptions import NotFound
from srm.logger import get_logger
from srm.models import Product, User, utcnow
from srm.permissions import Operation, authorize
from srm.schemas import ProductUpsert
from srm.services.base import BaseService

logger = get_logger(__name__)


class ProductService(BaseService):

    def list_products(self, user: User) -> List[Product]:
        authorize(user, Operation.PRODUCT_VIEW)
        return self.db.query(Product).order_by(Product.sku).all()

    def upsert_product(self, user: User, data: ProductUpsert) -> Product:
        """
        按SKU新增或更新商品，重复调用结果一致

        Args:
            user: 当前用户（管理员）
            data: 商品信息

        Returns:
            Product: 保存后的商品
        """
        authorize(user, Operation.PRODUCT_EDIT)

        now = utcnow()
        table = Product.__table__
        stmt = self.upsert_insert(table).values(
            sku=data.sku,
            name=data.name,
            spec=data.spec,
            unit_price=data.unit_price,
            created_at=now,
            updated_at=now
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.sku],
            set_={
                "name": stmt.excluded.name,
                "spec": stmt.excluded.spec,
                "unit_price": stmt.excluded.unit_price,
                "updated_at": stmt.excluded.updated_at,
            }
        )
        with self.transaction("保存商品"):
            self.db.execute(stmt)

        product = self.db.query(Product).filter(Product.sku == data.sku).one()
        logger.info(
            f"商品保存成功: {product.sku} {product.name} (ID: {product.id})",
            extra={"product_id": product.id, "user_id": user.id}
        )
        return product

    def delete_product(self, user: User, product_id: int):
        """删除商品，已有订单保存了商品信息副本，不受影响"""
        authorize(user, Operation.PRODUCT_EDIT)

        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            raise NotFound("商品不存在")

        sku = product.sku
        with self.transaction("删除商品"):
            self.db.delete(product)

        logger.info(f"商品删除成功: {sku} (ID: {product_id})", extra={"user_id": user.id})
