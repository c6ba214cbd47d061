# app/services/upload_service.py
from dataclasses import dataclass
from pathlib import Path
import logging
import os

import aiofiles
from fastapi import HTTPException, UploadFile, status

from app.core.config import Settings
from app.utils.upload_rules import (
    InvalidUploadError, validate_upload, route_upload, generate_filename
)

logger = logging.getLogger(__name__)


@dataclass
class StoredFile:
    original_name: str
    size: int
    content_type: str
    category: str
    filename: str
    url: str


class UploadService:
    """驗證上傳檔案並寫入 <UPLOAD_DIR>/<category>/<隨機檔名>"""

    def __init__(self, settings: Settings):
        self.root = Path(settings.UPLOAD_DIR)
        self.url_prefix = settings.UPLOAD_URL_PREFIX.rstrip("/")
        self.max_size = settings.MAX_UPLOAD_SIZE

    async def save(self, file: UploadFile) -> StoredFile:
        try:
            validate_upload(file.filename, file.content_type)
            category = route_upload(file.content_type)
        except InvalidUploadError as e:
            logger.warning("Rejected upload %r (%s): %s", file.filename, file.content_type, e)
            raise HTTPException(status.HTTP_400_BAD_REQUEST, str(e))

        # 多讀 1 byte 以判斷是否超過上限，超過時不寫入任何檔案
        content = await file.read(self.max_size + 1)
        if len(content) > self.max_size:
            logger.warning("Rejected upload %r: larger than %d bytes", file.filename, self.max_size)
            raise HTTPException(
                413,
                f"File too large. Maximum size is {self.max_size // (1024 * 1024)}MB."
            )

        filename = generate_filename(file.filename)
        directory = self.root / category
        file_path = directory / filename
        try:
            directory.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(file_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.exception("Failed to write upload to %s", file_path)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"檔案儲存失敗: {str(e)}"
            )

        logger.info("Stored upload %r as %s/%s (%d bytes)", file.filename, category, filename, len(content))
        return StoredFile(
            original_name=file.filename or filename,
            size=len(content),
            content_type=file.content_type,
            category=category,
            filename=filename,
            url=f"{self.url_prefix}/{category}/{filename}",
        )

    def path_for_url(self, url: str) -> Path | None:
        """將 /uploads/<category>/<filename> 轉回磁碟路徑；不屬於上傳目錄時回傳 None"""
        prefix = self.url_prefix + "/"
        if not url or not url.startswith(prefix):
            return None
        root = self.root.resolve()
        file_path = (root / url[len(prefix):]).resolve()
        if root not in file_path.parents:
            return None
        return file_path

    def remove(self, url: str) -> None:
        """刪除被取代的舊檔案；刪除失敗只記錄，不影響已完成的更新"""
        file_path = self.path_for_url(url)
        if file_path is None or not os.path.exists(file_path):
            return
        try:
            os.remove(file_path)
            logger.info("Removed superseded upload %s", file_path)
        except OSError:
            logger.warning("Failed to remove superseded upload %s", file_path, exc_info=True)
