import asyncio
import io

import pytest
from fastapi import HTTPException, UploadFile
from starlette.datastructures import Headers

from app.services.profile_service import ProfileService
from app.services.upload_service import UploadService
from tests.conftest import make_user


def make_upload(data, filename, content_type):
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def stored_files(upload_dir):
    return [p for p in upload_dir.rglob("*") if p.is_file()] if upload_dir.exists() else []


def test_upload_writes_nothing_when_profile_lookup_fails(settings, upload_dir):
    service = ProfileService(db=None, uploads=UploadService(settings))

    async def broken_fetch(*args, **kwargs):
        raise RuntimeError("database unavailable")

    service.repo.fetch_or_create = broken_fetch

    with pytest.raises(RuntimeError):
        asyncio.run(service.upload_attachment(make_user(), "resume", make_upload(b"%PDF", "cv.pdf", "application/pdf")))
    assert stored_files(upload_dir) == []


def test_rejected_upload_does_not_create_profile(run_with_session, settings, upload_dir):
    user = make_user()

    async def upload_exe(session):
        service = ProfileService(session, UploadService(settings))
        with pytest.raises(HTTPException) as exc_info:
            await service.upload_attachment(user, "resume", make_upload(b"MZ", "cv.exe", "application/octet-stream"))
        return exc_info.value.status_code

    async def lookup(session):
        return await ProfileService(session).repo.get_by_user_id(user.user_id)

    assert run_with_session(upload_exe) == 400
    assert run_with_session(lookup) is None
    assert stored_files(upload_dir) == []
