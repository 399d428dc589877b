"""
工具函数
"""

import io
import secrets
from datetime import datetime
from typing import Iterable

import bcrypt
from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, PatternFill

from srm.config import PASSWORD_MAX_BYTES


def _password_bytes(password: str) -> bytes:
    # bcrypt限制密码长度不能超过72字节，需要截断
    return password.encode("utf-8")[:PASSWORD_MAX_BYTES]


def hash_password(password: str) -> str:
    """
    对密码进行哈希处理

    Args:
        password: 原始密码

    Returns:
        str: bcrypt哈希后的密码

    使用样例:
        hashed = hash_password("mypassword")
    """
    return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    验证密码

    Args:
        password: 原始密码
        password_hash: 哈希后的密码

    Returns:
        bool: 密码是否正确，哈希格式无效时返回False

    使用样例:
        if verify_password("mypassword", stored_hash):
            print("密码正确")
    """
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        return False


def generate_order_no() -> str:
    """生成订单号，例如 PO20240101120000A1B2"""
    return f"PO{datetime.now().strftime('%Y%m%d%H%M%S')}{secrets.token_hex(2).upper()}"


ORDER_EXPORT_HEADERS = [
    "订单号", "SKU", "商品名", "规格", "数量", "单价", "总价",
    "供应商", "状态", "物流公司", "运单号", "创建时间"
]

ORDER_STATUS_LABELS = {
    "pending": "待确认",
    "shipped": "已发货",
    "completed": "已完成",
}


def build_orders_workbook(orders: Iterable) -> bytes:
    """
    将订单列表导出为Excel文件内容

    Args:
        orders: 订单对象列表（需包含supplier关联）

    Returns:
        bytes: xlsx文件内容

    使用样例:
        content = build_orders_workbook(orders)
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "订单"

    # 设置标题样式
    header_fill = PatternFill(start_color="4472C4", end_color="4472C4", fill_type="solid")
    header_font = Font(bold=True, color="FFFFFF")
    header_alignment = Alignment(horizontal="center", vertical="center")

    for col, header in enumerate(ORDER_EXPORT_HEADERS, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.fill = header_fill
        cell.font = header_font
        cell.alignment = header_alignment

    row = 1
    total_quantity = 0
    total_amount = 0.0
    for row, order in enumerate(orders, 2):
        values = [
            order.order_no,
            order.sku,
            order.name or "",
            order.spec or "",
            order.quantity,
            order.unit_price,
            order.total_price,
            order.supplier.nickname if order.supplier else "",
            ORDER_STATUS_LABELS.get(order.status, order.status),
            order.logistics_company or "",
            order.tracking_no or "",
            order.created_at.strftime("%Y-%m-%d %H:%M:%S") if order.created_at else "",
        ]
        for col, value in enumerate(values, 1):
            ws.cell(row=row, column=col, value=value)
        total_quantity += order.quantity or 0
        total_amount += order.total_price or 0

    # 写入总计行
    total_row = row + 2
    ws.cell(row=total_row, column=1, value="总计").font = Font(bold=True)
    ws.cell(row=total_row, column=5, value=total_quantity).font = Font(bold=True)
    ws.cell(row=total_row, column=7, value=round(total_amount, 2)).font = Font(bold=True)

    # 调整列宽
    for letter, width in zip("ABCDEFGHIJKL", [22, 15, 20, 20, 8, 10, 12, 16, 10, 14, 18, 20]):
        ws.column_dimensions[letter].width = width

    output = io.BytesIO()
    wb.save(output)
    return output.getvalue()
