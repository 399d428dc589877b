"""
日志配置模块
"""

import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from srm.config import LOG_DIR, LOG_BACKUP_DAYS

# 创建logs目录
LOG_DIR.mkdir(parents=True, exist_ok=True)

# 配置日志格式
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# 配置根日志记录器
logger = logging.getLogger("srm")
logger.setLevel(logging.DEBUG)

# 避免重复添加handler
if not logger.handlers:
    # 控制台handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(console_handler)

    # 文件handler - 所有日志，每天零点切分
    file_handler = TimedRotatingFileHandler(
        LOG_DIR / "srm.log",
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(file_handler)

    # 文件handler - 错误日志
    error_handler = TimedRotatingFileHandler(
        LOG_DIR / "error.log",
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding='utf-8'
    )
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(error_handler)


def get_logger(name: str = None):
    """
    获取日志记录器

    Args:
        name: 日志记录器名称，默认为调用模块名

    Returns:
        logging.Logger: 日志记录器对象

    使用样例:
        from srm.logger import get_logger
        logger = get_logger(__name__)
        logger.info("这是一条信息日志")
    """
    if name:
        if name == "srm" or name.startswith("srm."):
            return logging.getLogger(name)
        return logging.getLogger(f"srm.{name}")
    return logger
