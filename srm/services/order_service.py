"""
订单生命周期

订单状态只能前进: pending -> shipped -> completed。
发货由订单所属供应商操作，收货完成由管理员操作。
"""

from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from srm.config import ROLE_SUPPLIER, USER_STATUS_ACTIVE
from srm.exceptions import NotFound, InvalidRequest, InvalidTransition
from srm.logger import get_logger
from srm.models import Order, OrderStatus, Product, User
from srm.permissions import Operation, OWNER_SCOPED_ROLES, authorize
from srm.schemas import OrderCreate
from srm.services.base import BaseService
from srm.storage import AttachmentStore
from srm.utils import generate_order_no, build_orders_workbook

logger = get_logger(__name__)

# shipped -> shipped 用于供应商补充物流信息或附件
ORDER_TRANSITIONS = {
    OrderStatus.PENDING: frozenset({OrderStatus.SHIPPED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.SHIPPED, OrderStatus.COMPLETED}),
    OrderStatus.COMPLETED: frozenset(),
}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ORDER_TRANSITIONS.get(current, frozenset())


def source_statuses(target: OrderStatus) -> List[str]:
    """可以流转到target的所有状态值"""
    return [s.value for s, targets in ORDER_TRANSITIONS.items() if target in targets]


class OrderService(BaseService):

    def __init__(self, db: Session, store: Optional[AttachmentStore] = None):
        super().__init__(db)
        self.store = store or AttachmentStore()

    def _get(self, order_id: int) -> Order:
        order = self.db.query(Order).filter(Order.id == order_id).first()
        if not order:
            raise NotFound("订单不存在")
        return order

    def _check_transition(self, order: Order, target: OrderStatus):
        try:
            current = OrderStatus(order.status)
        except ValueError:
            raise InvalidTransition(f"订单状态异常: {order.status}")
        if not can_transition(current, target):
            raise InvalidTransition(
                f"订单当前状态为{current.value}，不能变更为{target.value}"
            )

    def create_order(self, user: User, data: OrderCreate) -> Order:
        """
        创建订单（管理员）

        名称、规格、单价未提供时从商品库按SKU补齐，总价在创建时计算并固定。

        Raises:
            Forbidden: 非管理员
            NotFound: 供应商不存在，或商品不存在且未提供单价
            InvalidRequest: 供应商已停用
        """
        authorize(user, Operation.ORDER_CREATE)

        supplier = self.db.query(User).filter(
            User.id == data.supplier_id,
            User.role == ROLE_SUPPLIER
        ).first()
        if not supplier:
            raise NotFound("供应商不存在")
        if supplier.status != USER_STATUS_ACTIVE:
            raise InvalidRequest("供应商已停用，不能下单")

        name, spec, unit_price = data.name, data.spec, data.unit_price
        if name is None or spec is None or unit_price is None:
            product = self.db.query(Product).filter(Product.sku == data.sku).first()
            if product:
                name = product.name if name is None else name
                spec = product.spec if spec is None else spec
                unit_price = product.unit_price if unit_price is None else unit_price
        if unit_price is None:
            raise NotFound(f"商品 {data.sku} 不存在，请填写单价")

        order = Order(
            order_no=data.order_no or generate_order_no(),
            sku=data.sku,
            name=name,
            spec=spec,
            quantity=data.quantity,
            unit_price=unit_price,
            total_price=round(data.quantity * unit_price, 2),
            supplier_id=supplier.id,
            status=OrderStatus.PENDING.value
        )
        with self.transaction("创建订单"):
            self.db.add(order)
        self.db.refresh(order)

        logger.info(
            f"订单创建成功: {order.order_no} (ID: {order.id})",
            extra={"order_id": order.id, "user_id": user.id, "supplier_id": order.supplier_id}
        )
        return order

    def list_orders(self, user: User) -> List[Order]:
        """管理员查看全部订单，供应商只能查看自己的订单，按创建时间倒序"""
        authorize(user, Operation.ORDER_VIEW)

        query = self.db.query(Order).options(joinedload(Order.supplier))
        if user.role in OWNER_SCOPED_ROLES:
            query = query.filter(Order.supplier_id == user.id)
        return query.order_by(Order.created_at.desc(), Order.id.desc()).all()

    def get_order(self, user: User, order_id: int) -> Order:
        order = self._get(order_id)
        authorize(user, Operation.ORDER_VIEW, owner_id=order.supplier_id)
        return order

    def confirm_ship(
        self,
        user: User,
        order_id: int,
        logistics_company: str,
        tracking_no: str,
        note=None,
        report=None
    ) -> Order:
        """
        供应商确认发货并上传送货单、检测报告

        未上传的附件保留原有记录。附件先保存，订单更新失败时不删除已保存的文件。

        Args:
            user: 当前用户（必须是订单所属供应商）
            order_id: 订单ID
            logistics_company: 物流公司
            tracking_no: 运单号
            note: 送货单上传文件，可为None
            report: 检测报告上传文件，可为None

        Returns:
            Order: 更新后的订单

        Raises:
            NotFound: 订单不存在
            Forbidden: 不是订单所属供应商
            InvalidTransition: 订单已完成
        """
        order = self._get(order_id)
        authorize(user, Operation.ORDER_SHIP, owner_id=order.supplier_id)
        self._check_transition(order, OrderStatus.SHIPPED)

        delivery_note = self.store.save(note)
        test_report = self.store.save(report)

        values = {
            Order.status: OrderStatus.SHIPPED.value,
            Order.logistics_company: logistics_company,
            Order.tracking_no: tracking_no,
        }
        if delivery_note:
            values[Order.delivery_note] = delivery_note
        if test_report:
            values[Order.test_report] = test_report

        with self.transaction("确认发货"):
            updated = self.db.query(Order).filter(
                Order.id == order_id,
                Order.supplier_id == user.id,
                Order.status.in_(source_statuses(OrderStatus.SHIPPED))
            ).update(values, synchronize_session=False)
            if not updated:
                raise InvalidTransition()
        self.db.refresh(order)

        logger.info(
            f"订单已发货: {order.order_no}, 物流={logistics_company}, 运单号={tracking_no}",
            extra={"order_id": order.id, "user_id": user.id}
        )
        return order

    def receive_complete(self, user: User, order_id: int) -> Order:
        """管理员确认收货，只允许已发货的订单"""
        authorize(user, Operation.ORDER_RECEIVE)
        order = self._get(order_id)
        self._check_transition(order, OrderStatus.COMPLETED)

        with self.transaction("确认收货"):
            updated = self.db.query(Order).filter(
                Order.id == order_id,
                Order.status.in_(source_statuses(OrderStatus.COMPLETED))
            ).update({Order.status: OrderStatus.COMPLETED.value}, synchronize_session=False)
            if not updated:
                raise InvalidTransition()
        self.db.refresh(order)

        logger.info(
            f"订单已完成: {order.order_no}",
            extra={"order_id": order.id, "user_id": user.id}
        )
        return order

    def export_orders(self, user: User) -> bytes:
        """按当前用户可见范围导出订单Excel"""
        orders = self.list_orders(user)
        logger.info(f"导出订单: {len(orders)}条, 用户={user.username}", extra={"user_id": user.id})
        return build_orders_workbook(orders)
