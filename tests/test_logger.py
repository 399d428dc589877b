"""
日志配置测试
"""

import logging
import os
from logging.handlers import TimedRotatingFileHandler

from srm.config import LOG_DIR
from srm.logger import get_logger, logger


def test_file_handlers_rotate_daily():
    """长期运行时日志文件按天切分，而不是一直写入启动当天的文件"""
    handlers = [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]
    assert {h.level for h in handlers} == {logging.DEBUG, logging.ERROR}
    for handler in handlers:
        assert handler.when == "MIDNIGHT"
        assert handler.backupCount > 0
        assert os.path.dirname(handler.baseFilename) == os.path.abspath(LOG_DIR)


def test_get_logger_names():
    assert get_logger("srm.services.order_service").name == "srm.services.order_service"
    assert get_logger("tools").name == "srm.tools"
    assert get_logger() is logger
