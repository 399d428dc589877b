"""
数据库连接和初始化
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from srm.models import Base
from srm.config import DATABASE_URL
from pathlib import Path

# sqlite数据库文件所在目录需要预先存在
if DATABASE_URL.startswith("sqlite:///") and ":memory:" not in DATABASE_URL:
    Path(DATABASE_URL.replace("sqlite:///", "", 1)).parent.mkdir(parents=True, exist_ok=True)

# 创建数据库引擎
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False} if "sqlite" in DATABASE_URL else {}
)

# 创建Session工厂
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db():
    """
    初始化数据库，创建所有表

    使用样例:
        from srm.database import init_db
        init_db()
    """
    Base.metadata.create_all(bind=engine)


def get_db():
    """
    获取数据库会话

    Yields:
        Session: 数据库会话对象

    使用样例:
        from srm.database import get_db
        db = next(get_db())
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
