import asyncio
import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from app.services.upload_service import UploadService


def make_upload(data, filename, content_type):
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_save_writes_into_category_directory(settings, upload_dir):
    stored = asyncio.run(UploadService(settings).save(make_upload(b"doc", "../../cv.doc", "application/msword")))

    assert stored.category == "resumes"
    assert stored.original_name == "../../cv.doc"
    assert stored.size == 3
    assert stored.url == f"/uploads/resumes/{stored.filename}"
    assert (upload_dir / "resumes" / stored.filename).read_bytes() == b"doc"


def test_save_rejects_mismatched_type(settings):
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(UploadService(settings).save(make_upload(b"x", "a.exe", "application/octet-stream")))
    assert exc_info.value.status_code == 400


def test_save_respects_configured_limit(settings, upload_dir):
    settings.MAX_UPLOAD_SIZE = 4
    service = UploadService(settings)
    asyncio.run(service.save(make_upload(b"1234", "a.png", "image/png")))
    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(service.save(make_upload(b"12345", "b.png", "image/png")))
    assert exc_info.value.status_code == 413
    assert len(list((upload_dir / "profile-images").iterdir())) == 1


def test_path_for_url_stays_inside_upload_dir(settings, upload_dir):
    service = UploadService(settings)
    assert service.path_for_url("/uploads/resumes/a.pdf") == (upload_dir / "resumes" / "a.pdf").resolve()
    assert service.path_for_url("/uploads/../../etc/passwd") is None
    assert service.path_for_url("/static/resumes/a.pdf") is None
    assert service.path_for_url("") is None


def test_remove_ignores_missing_files(settings, upload_dir):
    service = UploadService(settings)
    service.remove("/uploads/resumes/missing.pdf")

    stored = asyncio.run(service.save(make_upload(b"img", "a.gif", "image/gif")))
    service.remove(stored.url)
    assert not (upload_dir / "profile-images" / stored.filename).exists()
