"""
附件存储

将上传的文件保存到上传目录，返回可通过静态路径访问的相对地址。
"""

import os
import random
import shutil
import time
from pathlib import Path
from typing import Optional

from srm.config import UPLOAD_DIR, UPLOAD_URL_PREFIX
from srm.logger import get_logger

logger = get_logger(__name__)


class AttachmentStore:
    """附件存储，文件名加时间戳和随机数避免冲突"""

    def __init__(self, root_dir: Path = UPLOAD_DIR, url_prefix: str = UPLOAD_URL_PREFIX):
        self.root_dir = Path(root_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def _unique_name(self, filename: str) -> str:
        safe_name = os.path.basename(filename.replace("\\", "/")) or "file"
        return f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9 - 1)}-{safe_name}"

    def save(self, upload) -> Optional[str]:
        """
        保存上传文件

        Args:
            upload: 具有filename和file属性的上传对象（如UploadFile），可为None

        Returns:
            Optional[str]: 文件访问路径，例如 /uploads/1700000000000-123-note.pdf；
                未上传文件时返回None
        """
        if upload is None or not getattr(upload, "filename", None):
            return None

        self.root_dir.mkdir(parents=True, exist_ok=True)
        stored_name = self._unique_name(upload.filename)
        with open(self.root_dir / stored_name, "wb") as f:
            shutil.copyfileobj(upload.file, f)

        logger.info(f"附件保存成功: {upload.filename} -> {stored_name}")
        return f"{self.url_prefix}/{stored_name}"


def get_attachment_store() -> AttachmentStore:
    """获取附件存储（依赖注入）"""
    return AttachmentStore()
