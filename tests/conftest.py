"""
测试公共配置
数据库、上传目录和日志目录指向临时目录，每个测试前重建数据表
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="srm_test_")
os.environ["SRM_DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["SRM_UPLOAD_DIR"] = os.path.join(_TEST_DIR, "uploads")
os.environ["SRM_LOG_DIR"] = os.path.join(_TEST_DIR, "logs")
os.environ["SRM_DEFAULT_ADMIN_PASSWORD"] = "admin123"
os.environ["SRM_DEFAULT_SUPPLIER_PASSWORD"] = "supply123"

import pytest
from fastapi.testclient import TestClient
from srm.main import app
from srm.database import engine, SessionLocal
from srm.models import Base, User
from srm.config import ROLE_SUPPLIER
from srm.services.user_service import UserService
from srm.utils import hash_password

ADMIN = ("admin", "admin123")
SUPPLIER = ("supply", "supply123")
OTHER_SUPPLIER = ("supplier2", "testpass")


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """测试前初始化数据库：默认管理员、示范供应商和第二个供应商"""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        UserService(db).ensure_default_accounts()
        db.add(User(
            username=OTHER_SUPPLIER[0],
            password_hash=hash_password(OTHER_SUPPLIER[1]),
            role=ROLE_SUPPLIER,
            nickname="第二供应商"
        ))
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def login(client):
    """返回登录函数，登录成功后得到认证headers"""
    def _login(username, password):
        response = client.post("/api/login", json={"username": username, "password": password})
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}
    return _login


@pytest.fixture
def admin_headers(login):
    return login(*ADMIN)


@pytest.fixture
def supplier_headers(login):
    return login(*SUPPLIER)


@pytest.fixture
def other_supplier_headers(login):
    return login(*OTHER_SUPPLIER)


def _get_user(db, username):
    return db.query(User).filter(User.username == username).one()


@pytest.fixture
def admin(db):
    return _get_user(db, ADMIN[0])


@pytest.fixture
def supplier(db):
    return _get_user(db, SUPPLIER[0])


@pytest.fixture
def other_supplier(db):
    return _get_user(db, OTHER_SUPPLIER[0])
