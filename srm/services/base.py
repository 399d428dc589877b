"""
业务服务基类
"""

from contextlib import contextmanager

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from srm.exceptions import SRMError, Conflict, StoreFailure
from srm.logger import get_logger

logger = get_logger(__name__)

# 支持 INSERT ... ON CONFLICT 的数据库
UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class BaseService:
    """持有数据库会话的服务基类，会话由调用方传入"""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def transaction(self, action: str):
        """
        在上下文结束时提交，出错时回滚并转换为业务异常

        Args:
            action: 操作名称，用于日志和错误信息

        使用样例:
            with self.transaction("创建订单"):
                self.db.add(order)
        """
        try:
            yield
            self.db.commit()
        except SRMError:
            self.db.rollback()
            raise
        except IntegrityError as e:
            self.db.rollback()
            logger.warning(f"{action}失败，数据冲突: {e.orig}")
            raise Conflict(f"{action}失败，数据已存在") from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{action}失败: {e}", exc_info=True)
            raise StoreFailure(f"{action}失败") from e

    def upsert_insert(self, table):
        """
        按当前数据库方言构造可以调用on_conflict_do_update的INSERT语句

        Raises:
            StoreFailure: 数据库不支持 INSERT ... ON CONFLICT

        使用样例:
            stmt = self.upsert_insert(Product.__table__).values(sku="A", name="甲")
        """
        dialect = self.db.get_bind().dialect.name
        insert = UPSERT_DIALECTS.get(dialect)
        if insert is None:
            logger.error(f"数据库 {dialect} 不支持upsert")
            raise StoreFailure(f"不支持的数据库: {dialect}")
        return insert(table)
