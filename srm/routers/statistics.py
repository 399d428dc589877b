"""
仪表盘统计路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from srm.database import get_db
from srm.models import User
from srm.schemas import AdminStatsResponse, SupplierStatsResponse
from srm.auth import get_current_user
from srm.services.dashboard_service import DashboardService

router = APIRouter(prefix="/api/stats", tags=["statistics"])


@router.get("/admin", response_model=AdminStatsResponse)
async def get_admin_stats(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    管理员仪表盘：订单数、待确认订单数、总金额及按供应商汇总

    使用样例:
        GET /api/stats/admin
    """
    return DashboardService(db).admin_stats(current_user)


@router.get("/supplier/{user_id}", response_model=SupplierStatsResponse)
async def get_supplier_stats(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    供应商仪表盘（管理员或供应商本人）

    使用样例:
        GET /api/stats/supplier/2
    """
    return DashboardService(db).supplier_stats(current_user, user_id)
