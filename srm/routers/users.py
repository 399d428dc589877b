"""
登录和账号管理路由
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from srm.database import get_db
from srm.models import User
from srm.schemas import (
    LoginRequest, LoginResponse, PasswordChange, UserResponse,
    SupplierAccountCreate, UserAdminUpdate
)
from srm.auth import get_current_user, require_admin
from srm.config import TOKEN_EXPIRE_SECONDS
from srm.services.auth_service import AuthService
from srm.services.user_service import UserService
from typing import List

router = APIRouter(prefix="/api", tags=["users"])


@router.post("/login", response_model=LoginResponse)
async def login(
    login_data: LoginRequest,
    db: Session = Depends(get_db)
):
    """
    用户登录

    Args:
        login_data: 登录信息（用户名和密码）
        db: 数据库会话

    Returns:
        LoginResponse: token和用户信息

    使用样例:
        POST /api/login
        {
            "username": "admin",
            "password": "123"
        }
    """
    token, user = AuthService(db).login(login_data.username, login_data.password)
    return LoginResponse(
        token=token,
        expires_in=TOKEN_EXPIRE_SECONDS,
        user=UserResponse.model_validate(user)
    )


@router.get("/user/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user)
):
    """
    获取当前用户信息

    使用样例:
        GET /api/user/me
    """
    return UserResponse.model_validate(current_user)


@router.post("/user/change-password")
async def change_password(
    password_data: PasswordChange,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    修改自己的密码

    Args:
        password_data: 原密码和新密码
        current_user: 当前登录用户
        db: 数据库会话

    Returns:
        dict: 更新结果

    使用样例:
        POST /api/user/change-password
        {
            "old_password": "123",
            "new_password": "newpassword123"
        }
    """
    AuthService(db).change_password(
        current_user, password_data.old_password, password_data.new_password
    )
    return {"success": True, "message": "密码修改成功"}


@router.get("/admin/users", response_model=List[UserResponse])
async def list_users(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    获取所有非管理员账号（仅管理员）

    使用样例:
        GET /api/admin/users
    """
    users = UserService(db).list_users(current_user)
    return [UserResponse.model_validate(u) for u in users]


@router.post("/admin/users", response_model=UserResponse)
async def create_supplier_account(
    user_data: SupplierAccountCreate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    创建供应商账号（仅管理员）

    Raises:
        Conflict: 用户名已存在

    使用样例:
        POST /api/admin/users
        {
            "username": "supplier01",
            "password": "password123",
            "nickname": "某某供应商"
        }
    """
    new_user = UserService(db).create_supplier(current_user, user_data)
    return UserResponse.model_validate(new_user)


@router.post("/admin/users/update", response_model=UserResponse)
async def update_user(
    update_data: UserAdminUpdate,
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db)
):
    """
    重置密码或启停账号（仅管理员）

    使用样例:
        POST /api/admin/users/update
        {
            "user_id": 2,
            "status": "disabled"
        }
    """
    user = UserService(db).update_user(current_user, update_data)
    return UserResponse.model_validate(user)
