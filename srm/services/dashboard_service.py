"""
仪表盘统计，数据全部来自订单表，没有订单时各项为0
"""

from sqlalchemy import func, case

from srm.logger import get_logger
from srm.models import Order, OrderStatus, SupplierProfile, User
from srm.permissions import Operation, authorize
from srm.schemas import StatsSummary, SupplierTotal, AdminStatsResponse, SupplierStatsResponse
from srm.services.base import BaseService

logger = get_logger(__name__)


class DashboardService(BaseService):

    def _summary(self, *criteria) -> StatsSummary:
        total, pending, amount = self.db.query(
            func.count(Order.id),
            func.coalesce(func.sum(case((Order.status == OrderStatus.PENDING.value, 1), else_=0)), 0),
            func.coalesce(func.sum(Order.total_price), 0),
        ).filter(*criteria).one()
        return StatsSummary(
            total=total or 0,
            pending=int(pending or 0),
            amount=round(float(amount or 0), 2)
        )

    def admin_stats(self, user: User) -> AdminStatsResponse:
        """
        管理员仪表盘：订单总数、待确认数、总金额，以及按供应商汇总

        Returns:
            AdminStatsResponse: 统计结果
        """
        authorize(user, Operation.STATS_ADMIN)

        value = func.coalesce(func.sum(Order.total_price), 0)
        rows = self.db.query(
            User.id,
            User.nickname,
            value.label("value"),
            func.count(Order.id).label("count")
        ).join(Order, Order.supplier_id == User.id) \
            .group_by(User.id, User.nickname) \
            .order_by(value.desc(), User.id) \
            .all()

        suppliers = [
            SupplierTotal(
                supplier_id=row.id,
                name=row.nickname,
                value=round(float(row.value or 0), 2),
                count=row.count or 0
            )
            for row in rows
        ]
        return AdminStatsResponse(stats=self._summary(), suppliers=suppliers)

    def supplier_stats(self, user: User, supplier_id: int) -> SupplierStatsResponse:
        """供应商仪表盘，未上传营业执照时profile_incomplete为True"""
        authorize(user, Operation.STATS_SUPPLIER, owner_id=supplier_id)

        license_file = self.db.query(SupplierProfile.license_file) \
            .filter(SupplierProfile.user_id == supplier_id) \
            .scalar()
        return SupplierStatsResponse(
            stats=self._summary(Order.supplier_id == supplier_id),
            profile_incomplete=not license_file
        )
