"""
数据库迁移脚本
检查现有数据库是否和现在的数据模型匹配，补齐缺失的列并转换旧数据

使用样例:
    python -m srm.migrate_db
"""

import sqlite3
from pathlib import Path
from srm.config import DATABASE_URL, USER_STATUS_ACTIVE
from srm.logger import get_logger
from srm.models import OrderStatus
from srm.utils import hash_password

logger = get_logger(__name__)

# 旧版本使用中文状态值
LEGACY_ORDER_STATUS = {
    "待确认": OrderStatus.PENDING.value,
    "已发货": OrderStatus.SHIPPED.value,
    "已收货": OrderStatus.COMPLETED.value,
    "已完成": OrderStatus.COMPLETED.value,
}


def get_db_path():
    """获取数据库文件路径"""
    if DATABASE_URL.startswith("sqlite:///") and ":memory:" not in DATABASE_URL:
        return Path(DATABASE_URL.replace("sqlite:///", "", 1))
    return None


def get_table_columns(conn, table_name):
    """获取表的列信息，表不存在时返回空字典"""
    cursor = conn.cursor()
    cursor.execute(f"PRAGMA table_info({table_name})")
    columns = {}
    for row in cursor.fetchall():
        columns[row[1]] = {
            "type": row[2],
            "notnull": row[3],
            "default": row[4],
            "pk": row[5]
        }
    return columns


def migrate_users(conn):
    """补齐users表的列，明文密码转为哈希"""
    users_columns = get_table_columns(conn, "users")
    if not users_columns:
        logger.info("users表不存在，跳过")
        return
    logger.info(f"users表现有列: {list(users_columns.keys())}")
    cursor = conn.cursor()

    if "nickname" not in users_columns:
        logger.info("添加nickname列到users表")
        cursor.execute("ALTER TABLE users ADD COLUMN nickname VARCHAR(100)")

    if "status" not in users_columns:
        logger.info("添加status列到users表")
        cursor.execute(
            f"ALTER TABLE users ADD COLUMN status VARCHAR(20) NOT NULL DEFAULT '{USER_STATUS_ACTIVE}'"
        )
        cursor.execute("CREATE INDEX IF NOT EXISTS ix_users_status ON users(status)")

    if "created_at" not in users_columns:
        logger.info("添加created_at列到users表")
        cursor.execute("ALTER TABLE users ADD COLUMN created_at DATETIME")

    if "password_hash" not in users_columns:
        logger.info("添加password_hash列到users表")
        cursor.execute("ALTER TABLE users ADD COLUMN password_hash VARCHAR(255)")
        if "password" in users_columns:
            cursor.execute("SELECT id, password FROM users")
            rows = cursor.fetchall()
            for user_id, password in rows:
                cursor.execute(
                    "UPDATE users SET password_hash = ? WHERE id = ?",
                    (hash_password(password or ""), user_id)
                )
            logger.info(f"已转换 {len(rows)} 个明文密码")

    if "password" in users_columns:
        drop_plaintext_passwords(conn)


def drop_plaintext_passwords(conn):
    """删除旧版本的明文密码列，sqlite低于3.35时清空该列"""
    cursor = conn.cursor()
    if sqlite3.sqlite_version_info >= (3, 35, 0):
        logger.info("删除users表的明文password列")
        cursor.execute("ALTER TABLE users DROP COLUMN password")
    else:
        logger.info("清空users表的明文password列")
        cursor.execute("UPDATE users SET password = NULL")


def migrate_orders(conn):
    """补齐旧订单的空字段，旧版本允许订单号、数量和金额为空"""
    if not get_table_columns(conn, "orders"):
        return
    cursor = conn.cursor()
    cursor.execute("UPDATE orders SET order_no = 'LEGACY-' || id WHERE order_no IS NULL OR order_no = ''")
    if cursor.rowcount:
        logger.info(f"补齐订单号: {cursor.rowcount} 条记录")
    cursor.execute("UPDATE orders SET sku = '' WHERE sku IS NULL")
    for column in ("quantity", "unit_price", "total_price"):
        cursor.execute(f"UPDATE orders SET {column} = 0 WHERE {column} IS NULL")
        if cursor.rowcount:
            logger.info(f"补齐{column}: {cursor.rowcount} 条记录")
    cursor.execute(
        "UPDATE orders SET status = ? WHERE status IS NULL", (OrderStatus.PENDING.value,)
    )


def migrate_profiles(conn):
    """旧版本表单提交的空有效期保存为空字符串，转换为NULL"""
    if not get_table_columns(conn, "supplier_profiles"):
        return
    cursor = conn.cursor()
    for column in ("license_expiry", "permit_expiry"):
        cursor.execute(f"UPDATE supplier_profiles SET {column} = NULL WHERE TRIM({column}) = ''")
        if cursor.rowcount:
            logger.info(f"清空无效的{column}: {cursor.rowcount} 条记录")


def migrate_order_status(conn):
    """将旧版本的中文订单状态转换为新状态值"""
    if not get_table_columns(conn, "orders"):
        return
    cursor = conn.cursor()
    for old_status, new_status in LEGACY_ORDER_STATUS.items():
        cursor.execute(
            "UPDATE orders SET status = ? WHERE status = ?",
            (new_status, old_status)
        )
        if cursor.rowcount:
            logger.info(f"  {old_status} → {new_status}: {cursor.rowcount} 条记录")


def migrate_database():
    """执行数据库迁移"""
    db_path = get_db_path()
    if not db_path or not db_path.exists():
        logger.info("数据库文件不存在，将在首次运行时创建")
        return

    conn = sqlite3.connect(str(db_path))
    try:
        migrate_users(conn)
        migrate_order_status(conn)
        migrate_orders(conn)
        migrate_profiles(conn)
        conn.commit()
        logger.info("数据库迁移完成")
    except Exception as e:
        conn.rollback()
        logger.error(f"数据库迁移失败: {e}", exc_info=True)
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    migrate_database()
