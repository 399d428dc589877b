"""
初始化数据库脚本
清空所有数据表并创建默认管理员和示范供应商账号
"""

from srm.database import SessionLocal, engine
from srm.models import Base
from srm.services.user_service import UserService
from srm.config import (
    DEFAULT_ADMIN_USERNAME, DEFAULT_ADMIN_PASSWORD,
    DEFAULT_SUPPLIER_USERNAME, DEFAULT_SUPPLIER_PASSWORD
)


def recreate_tables():
    """重新创建所有表"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    print("已重新创建所有数据表")


def create_initial_data():
    """创建初始数据"""
    db = SessionLocal()
    try:
        UserService(db).ensure_default_accounts()
        print(f"创建默认管理员: {DEFAULT_ADMIN_USERNAME} / {DEFAULT_ADMIN_PASSWORD}")
        print(f"创建示范供应商: {DEFAULT_SUPPLIER_USERNAME} / {DEFAULT_SUPPLIER_PASSWORD}")
        print("数据库初始化完成！")
    finally:
        db.close()


if __name__ == "__main__":
    print("初始化数据库...")
    # 清空所有数据并重新创建表
    recreate_tables()
    # 创建初始数据
    create_initial_data()
