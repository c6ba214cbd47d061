# app/utils/upload_rules.py
# 上傳檔案的純邏輯：類型驗證、存放目錄判斷、檔名產生
import os
import secrets

ALLOWED_IMAGE_EXTENSIONS = {"jpeg", "jpg", "png", "gif", "webp"}
ALLOWED_DOCUMENT_EXTENSIONS = {"pdf", "doc", "docx"}
ALLOWED_EXTENSIONS = ALLOWED_IMAGE_EXTENSIONS | ALLOWED_DOCUMENT_EXTENSIONS

DOCUMENT_MIME_TYPES = ("application/pdf", "application/msword")
OPENXML_MIME_PREFIX = "application/vnd.openxmlformats-officedocument"

# 存放類別 (同時也是 URL 與目錄名稱)
PROFILE_IMAGE_CATEGORY = "profile-images"
RESUME_CATEGORY = "resumes"


class InvalidUploadError(ValueError):
    """檔案類型不被接受"""


def get_extension(filename: str | None) -> str:
    """回傳小寫、含 '.' 的副檔名；沒有副檔名時回傳空字串"""
    return os.path.splitext(filename or "")[1].lower()


def is_image_mime(content_type: str) -> bool:
    return content_type.startswith("image/")


def is_document_mime(content_type: str) -> bool:
    return content_type in DOCUMENT_MIME_TYPES or content_type.startswith(OPENXML_MIME_PREFIX)


def validate_upload(filename: str | None, content_type: str | None) -> None:
    """
    副檔名與 MIME type 需同時合法才接受，否則拋出 InvalidUploadError。
    """
    extension = get_extension(filename).lstrip(".")
    content_type = (content_type or "").lower()

    extension_ok = extension in ALLOWED_EXTENSIONS
    mime_ok = (
        (is_image_mime(content_type) and content_type.split("/", 1)[1] in ALLOWED_IMAGE_EXTENSIONS)
        or is_document_mime(content_type)
    )

    if not (extension_ok and mime_ok):
        raise InvalidUploadError(
            "Invalid file type. Only images (JPEG, PNG, GIF, WebP) "
            "and documents (PDF, DOC, DOCX) are allowed."
        )


def route_upload(content_type: str | None) -> str:
    """依 MIME type 決定存放類別；未知類型一律拒絕，不給預設目錄"""
    content_type = (content_type or "").lower()
    if is_image_mime(content_type):
        return PROFILE_IMAGE_CATEGORY
    if is_document_mime(content_type):
        return RESUME_CATEGORY
    raise InvalidUploadError("Invalid file type")


def generate_filename(original_name: str | None) -> str:
    """
    128 bits 隨機 hex + 原始副檔名。
    原始檔名本身不會被使用 (避免 path traversal 或覆蓋其他檔案)。
    """
    return secrets.token_hex(16) + get_extension(original_name)
