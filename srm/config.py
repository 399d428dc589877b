"""
配置文件
包含系统的重要配置常数，均可通过环境变量覆盖
"""

import os
from pathlib import Path

# 项目根目录
BASE_DIR = Path(__file__).parent.parent

# 数据库配置（支持sqlite和postgresql，迁移脚本仅处理sqlite）
DATABASE_URL = os.getenv(
    "SRM_DATABASE_URL",
    f"sqlite:///{(BASE_DIR / 'data' / 'suppliers.db').as_posix()}"
)

# 附件上传配置
UPLOAD_DIR = Path(os.getenv("SRM_UPLOAD_DIR", str(BASE_DIR / "public" / "uploads")))
UPLOAD_URL_PREFIX = "/uploads"

# 日志目录
LOG_DIR = Path(os.getenv("SRM_LOG_DIR", str(BASE_DIR / "logs")))
LOG_BACKUP_DAYS = int(os.getenv("SRM_LOG_BACKUP_DAYS", "30"))

# Token配置
JWT_SECRET_KEY = os.getenv("SRM_JWT_SECRET", "your-secret-key-change-in-production")
JWT_ALGORITHM = "HS256"
TOKEN_EXPIRE_SECONDS = 86400  # 24小时

# 用户角色
ROLE_ADMIN = "admin"
ROLE_SUPPLIER = "supplier"

# 用户状态
USER_STATUS_ACTIVE = "active"
USER_STATUS_DISABLED = "disabled"

# 初始账号
DEFAULT_ADMIN_USERNAME = "admin"
DEFAULT_ADMIN_PASSWORD = os.getenv("SRM_DEFAULT_ADMIN_PASSWORD", "123")
DEFAULT_ADMIN_NICKNAME = "系统管理员"
DEFAULT_SUPPLIER_USERNAME = "supply"
DEFAULT_SUPPLIER_PASSWORD = os.getenv("SRM_DEFAULT_SUPPLIER_PASSWORD", "123")
DEFAULT_SUPPLIER_NICKNAME = "示范供应商"

# bcrypt只处理前72字节
PASSWORD_MAX_BYTES = 72
