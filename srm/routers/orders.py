"""
订单管理路由
"""

from fastapi import APIRouter, Depends, Form, File, UploadFile
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session
from srm.database import get_db
from srm.models import User
from srm.schemas import OrderCreate, OrderReceive, OrderResponse
from srm.auth import get_current_user
from srm.storage import AttachmentStore, get_attachment_store
from srm.services.order_service import OrderService
from datetime import datetime
from typing import List, Optional
from urllib.parse import quote
import io

router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.get("", response_model=List[OrderResponse])
async def list_orders(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    获取订单列表，管理员查看全部，供应商只能查看自己的订单

    Args:
        current_user: 当前登录用户
        db: 数据库会话

    Returns:
        List[OrderResponse]: 按创建时间倒序的订单列表

    使用样例:
        GET /api/orders
    """
    orders = OrderService(db).list_orders(current_user)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/export")
async def export_orders(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    导出订单为Excel文件

    使用样例:
        GET /api/orders/export
    """
    content = OrderService(db).export_orders(current_user)

    # 使用RFC 5987格式支持UTF-8编码的文件名
    filename = f"订单_{datetime.now().strftime('%Y%m%d')}.xlsx"
    encoded_filename = quote(filename, safe='')
    return StreamingResponse(
        io.BytesIO(content),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f"attachment; filename*=UTF-8''{encoded_filename}"
        }
    )


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order_detail(
    order_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    获取订单详情

    使用样例:
        GET /api/orders/1
    """
    order = OrderService(db).get_order(current_user, order_id)
    return OrderResponse.model_validate(order)


@router.post("", response_model=OrderResponse)
async def create_order(
    order_data: OrderCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    创建订单（管理员）

    Args:
        order_data: 订单信息
        current_user: 当前登录用户
        db: 数据库会话

    Returns:
        OrderResponse: 创建的订单

    使用样例:
        POST /api/orders
        {
            "sku": "SKU-001",
            "name": "商品名",
            "spec": "500g/袋",
            "quantity": 3,
            "unit_price": 10.5,
            "supplier_id": 2
        }
    """
    order = OrderService(db).create_order(current_user, order_data)
    return OrderResponse.model_validate(order)


@router.post("/confirm", response_model=OrderResponse)
async def confirm_ship(
    order_id: int = Form(...),
    logistics_company: str = Form(...),
    tracking_no: str = Form(...),
    note: Optional[UploadFile] = File(None),
    report: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
    db: Session = Depends(get_db)
):
    """
    供应商确认发货（multipart表单），可同时上传送货单和检测报告

    Args:
        order_id: 订单ID
        logistics_company: 物流公司
        tracking_no: 运单号
        note: 送货单
        report: 检测报告

    使用样例:
        POST /api/orders/confirm
        order_id=1, logistics_company=顺丰, tracking_no=SF123, note=@note.pdf
    """
    order = OrderService(db, store).confirm_ship(
        current_user, order_id, logistics_company, tracking_no, note=note, report=report
    )
    return OrderResponse.model_validate(order)


@router.post("/receive", response_model=OrderResponse)
async def receive_order(
    receive_data: OrderReceive,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    管理员确认收货，订单完成

    使用样例:
        POST /api/orders/receive
        {"order_id": 1}
    """
    order = OrderService(db).receive_complete(current_user, receive_data.order_id)
    return OrderResponse.model_validate(order)
