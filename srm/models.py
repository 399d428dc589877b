"""
数据库模型定义
"""

import enum
from sqlalchemy import Column, Integer, String, Float, DateTime, Date, ForeignKey
from sqlalchemy.orm import declarative_base, relationship
from datetime import datetime, timezone
from srm.config import USER_STATUS_ACTIVE

Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


class OrderStatus(str, enum.Enum):
    """订单状态"""
    PENDING = "pending"
    SHIPPED = "shipped"
    COMPLETED = "completed"


class User(Base):
    """用户表"""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # admin、supplier，创建后不可修改
    nickname = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default=USER_STATUS_ACTIVE, index=True)  # active、disabled
    created_at = Column(DateTime, default=utcnow)

    # 关联关系
    profile = relationship("SupplierProfile", back_populates="user", uselist=False)
    orders = relationship("Order", back_populates="supplier", foreign_keys="Order.supplier_id")


class Product(Base):
    """商品表"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String(100), unique=True, nullable=False, index=True)
    name = Column(String(200), nullable=False)
    spec = Column(String(500), nullable=True)  # 规格
    unit_price = Column(Float, nullable=False, default=0)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)


class SupplierProfile(Base):
    """供应商资质资料表"""
    __tablename__ = "supplier_profiles"

    user_id = Column(Integer, ForeignKey("users.id"), primary_key=True)
    license_file = Column(String(500), nullable=True)  # 营业执照
    license_expiry = Column(Date, nullable=True)
    permit_file = Column(String(500), nullable=True)  # 生产许可证
    permit_expiry = Column(Date, nullable=True)
    updated_at = Column(DateTime, default=utcnow)

    user = relationship("User", back_populates="profile")


class Order(Base):
    """采购订单表，商品信息在创建时冗余保存"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    order_no = Column(String(50), nullable=False, index=True)
    sku = Column(String(100), nullable=False, index=True)
    name = Column(String(200), nullable=True)
    spec = Column(String(500), nullable=True)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)  # 创建时计算，之后不再变化
    supplier_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    logistics_company = Column(String(100), nullable=True)
    tracking_no = Column(String(100), nullable=True)
    delivery_note = Column(String(500), nullable=True)  # 送货单
    test_report = Column(String(500), nullable=True)  # 检测报告
    created_at = Column(DateTime, default=utcnow, index=True)

    supplier = relationship("User", foreign_keys=[supplier_id], back_populates="orders")

    @property
    def supplier_name(self):
        return self.supplier.nickname if self.supplier else None
