"""
供应商及资质管理路由
"""

from fastapi import APIRouter, Depends, Form, File, UploadFile
from sqlalchemy.orm import Session
from srm.database import get_db
from srm.models import User
from srm.schemas import SupplierOption, ProfileResponse
from srm.auth import get_current_user
from srm.storage import AttachmentStore, get_attachment_store
from srm.services.profile_service import ProfileService
from srm.services.user_service import UserService
from datetime import date
from typing import List, Optional

router = APIRouter(prefix="/api", tags=["suppliers"])


@router.get("/suppliers-list", response_model=List[SupplierOption])
async def list_suppliers(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    获取启用状态的供应商列表（下单下拉框）

    使用样例:
        GET /api/suppliers-list
    """
    suppliers = UserService(db).list_suppliers(current_user)
    return [SupplierOption.model_validate(s) for s in suppliers]


@router.get("/profile/{user_id}")
async def get_profile(
    user_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    获取供应商资质资料，未提交过时返回空对象

    Args:
        user_id: 供应商用户ID
        current_user: 当前登录用户（管理员或供应商本人）
        db: 数据库会话

    使用样例:
        GET /api/profile/2
    """
    profile = ProfileService(db).get_profile(current_user, user_id)
    if not profile:
        return {}
    return ProfileResponse.model_validate(profile).model_dump(mode="json")


@router.post("/profile", response_model=ProfileResponse)
async def upsert_profile(
    user_id: int = Form(...),
    license_expiry: Optional[date] = Form(None),
    permit_expiry: Optional[date] = Form(None),
    license_file: Optional[UploadFile] = File(None),
    permit_file: Optional[UploadFile] = File(None),
    current_user: User = Depends(get_current_user),
    store: AttachmentStore = Depends(get_attachment_store),
    db: Session = Depends(get_db)
):
    """
    提交或更新资质资料（multipart表单），未上传的文件保留原记录

    使用样例:
        POST /api/profile
        user_id=2, license_expiry=2026-12-31, license_file=@license.pdf
    """
    profile = ProfileService(db, store).upsert_profile(
        current_user,
        user_id,
        license_expiry=license_expiry,
        permit_expiry=permit_expiry,
        license_upload=license_file,
        permit_upload=permit_file
    )
    return ProfileResponse.model_validate(profile)
