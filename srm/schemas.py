"""
Pydantic模型定义，用于API请求和响应验证
"""

from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime, date


# 用户相关
class UserResponse(BaseModel):
    """用户响应模型"""
    id: int
    username: str
    role: str
    nickname: Optional[str] = None
    status: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class LoginRequest(BaseModel):
    """登录请求模型"""
    username: str = Field(..., description="用户名")
    password: str = Field(..., description="密码")


class LoginResponse(BaseModel):
    """登录响应模型"""
    success: bool = True
    message: str = "登录成功"
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserResponse


class PasswordChange(BaseModel):
    """修改自己密码请求模型"""
    old_password: str = Field(..., min_length=1, description="原密码")
    new_password: str = Field(..., min_length=1, description="新密码")


class SupplierAccountCreate(BaseModel):
    """创建供应商账号请求模型"""
    username: str = Field(..., min_length=1, max_length=50, description="用户名")
    password: str = Field(..., min_length=1, description="密码")
    nickname: str = Field(..., min_length=1, max_length=100, description="供应商名称")


class UserAdminUpdate(BaseModel):
    """管理员重置密码或启停账号请求模型"""
    user_id: int
    password: Optional[str] = Field(None, min_length=1, description="新密码")
    status: Optional[Literal["active", "disabled"]] = Field(None, description="账号状态")


class SupplierOption(BaseModel):
    """供应商下拉选项"""
    id: int
    nickname: Optional[str] = None

    model_config = {"from_attributes": True}


# 商品相关
class ProductUpsert(BaseModel):
    """新增或更新商品请求模型（按SKU）"""
    sku: str = Field(..., min_length=1, max_length=100, description="SKU")
    name: str = Field(..., min_length=1, max_length=200, description="商品名")
    spec: Optional[str] = Field(None, max_length=500, description="规格")
    unit_price: float = Field(..., ge=0, description="单价")


class ProductResponse(BaseModel):
    """商品响应模型"""
    id: int
    sku: str
    name: str
    spec: Optional[str] = None
    unit_price: float
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# 订单相关
class OrderCreate(BaseModel):
    """创建订单请求模型，名称、规格、单价缺省时取自商品库"""
    order_no: Optional[str] = Field(None, max_length=50, description="订单号")
    sku: str = Field(..., min_length=1, max_length=100, description="SKU")
    name: Optional[str] = Field(None, max_length=200, description="商品名")
    spec: Optional[str] = Field(None, max_length=500, description="规格")
    quantity: int = Field(..., ge=1, description="数量")
    unit_price: Optional[float] = Field(None, ge=0, description="单价")
    supplier_id: int = Field(..., description="供应商用户ID")


class OrderReceive(BaseModel):
    """确认收货请求模型"""
    order_id: int


class OrderResponse(BaseModel):
    """订单响应模型"""
    id: int
    order_no: str
    sku: str
    name: Optional[str] = None
    spec: Optional[str] = None
    quantity: int
    unit_price: float
    total_price: float
    supplier_id: int
    supplier_name: Optional[str] = None
    status: str
    logistics_company: Optional[str] = None
    tracking_no: Optional[str] = None
    delivery_note: Optional[str] = None
    test_report: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# 资质相关
class ProfileResponse(BaseModel):
    """供应商资质响应模型"""
    user_id: int
    license_file: Optional[str] = None
    license_expiry: Optional[date] = None
    permit_file: Optional[str] = None
    permit_expiry: Optional[date] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


# 统计相关
class StatsSummary(BaseModel):
    """订单汇总"""
    total: int = 0
    pending: int = 0
    amount: float = 0.0


class SupplierTotal(BaseModel):
    """按供应商汇总"""
    supplier_id: int
    name: Optional[str] = None
    value: float = 0.0
    count: int = 0


class AdminStatsResponse(BaseModel):
    """管理员仪表盘响应模型"""
    stats: StatsSummary
    suppliers: List[SupplierTotal]


class SupplierStatsResponse(BaseModel):
    """供应商仪表盘响应模型"""
    stats: StatsSummary
    profile_incomplete: bool
