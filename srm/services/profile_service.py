"""
供应商资质管理
"""

from datetime import date
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from srm.config import ROLE_SUPPLIER
from srm.exceptions import NotFound
from srm.logger import get_logger
from srm.models import SupplierProfile, User, utcnow
from srm.permissions import Operation, authorize
from srm.services.base import BaseService
from srm.storage import AttachmentStore

logger = get_logger(__name__)


class ProfileService(BaseService):

    def __init__(self, db: Session, store: Optional[AttachmentStore] = None):
        super().__init__(db)
        self.store = store or AttachmentStore()

    def get_profile(self, user: User, user_id: int) -> Optional[SupplierProfile]:
        authorize(user, Operation.PROFILE_VIEW, owner_id=user_id)
        return self.db.query(SupplierProfile).filter(SupplierProfile.user_id == user_id).first()

    def upsert_profile(
        self,
        user: User,
        user_id: int,
        license_expiry: Optional[date] = None,
        permit_expiry: Optional[date] = None,
        license_upload=None,
        permit_upload=None
    ) -> SupplierProfile:
        """
        提交或更新资质资料

        未上传的文件、未填写的有效期保留原值，更新时间每次刷新。
        新旧值的合并在一条 INSERT ... ON CONFLICT 语句中完成。

        Args:
            user: 当前用户（供应商本人或管理员）
            user_id: 供应商用户ID
            license_expiry: 营业执照有效期
            permit_expiry: 生产许可证有效期
            license_upload: 营业执照上传文件
            permit_upload: 生产许可证上传文件

        Returns:
            SupplierProfile: 保存后的资质资料

        Raises:
            Forbidden: 修改他人资质
            NotFound: 供应商不存在
        """
        authorize(user, Operation.PROFILE_EDIT, owner_id=user_id)

        target = self.db.query(User).filter(User.id == user_id, User.role == ROLE_SUPPLIER).first()
        if not target:
            raise NotFound("供应商不存在")

        license_file = self.store.save(license_upload)
        permit_file = self.store.save(permit_upload)

        table = SupplierProfile.__table__
        stmt = self.upsert_insert(table).values(
            user_id=user_id,
            license_file=license_file,
            license_expiry=license_expiry,
            permit_file=permit_file,
            permit_expiry=permit_expiry,
            updated_at=utcnow()
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[table.c.user_id],
            set_={
                "license_file": func.coalesce(stmt.excluded.license_file, table.c.license_file),
                "license_expiry": func.coalesce(stmt.excluded.license_expiry, table.c.license_expiry),
                "permit_file": func.coalesce(stmt.excluded.permit_file, table.c.permit_file),
                "permit_expiry": func.coalesce(stmt.excluded.permit_expiry, table.c.permit_expiry),
                "updated_at": stmt.excluded.updated_at,
            }
        )
        with self.transaction("保存资质"):
            self.db.execute(stmt)

        profile = self.db.query(SupplierProfile).filter(SupplierProfile.user_id == user_id).one()
        self.db.refresh(profile)
        logger.info(
            f"资质资料已更新: 供应商ID={user_id}",
            extra={"user_id": user.id, "supplier_id": user_id}
        )
        return profile
