import re

import pytest

from app.utils.upload_rules import (
    InvalidUploadError,
    PROFILE_IMAGE_CATEGORY,
    RESUME_CATEGORY,
    generate_filename,
    route_upload,
    validate_upload,
)

DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@pytest.mark.parametrize("filename, content_type", [
    ("avatar.png", "image/png"),
    ("avatar.JPG", "image/jpeg"),
    ("photo.webp", "image/webp"),
    ("cv.pdf", "application/pdf"),
    ("cv.doc", "application/msword"),
    ("cv.DOCX", DOCX),
])
def test_accepts_allowed_files(filename, content_type):
    validate_upload(filename, content_type)


@pytest.mark.parametrize("filename, content_type", [
    ("setup.exe", "application/octet-stream"),
    ("avatar.png", "application/octet-stream"),
    ("setup.exe", "image/png"),
    ("notes.txt", "text/plain"),
    ("vector.svg", "image/svg+xml"),
    ("noext", "image/png"),
    (None, None),
])
def test_rejects_other_files(filename, content_type):
    with pytest.raises(InvalidUploadError):
        validate_upload(filename, content_type)


def test_routes_images_and_documents():
    assert route_upload("image/png") == PROFILE_IMAGE_CATEGORY
    assert route_upload("application/pdf") == RESUME_CATEGORY
    assert route_upload("application/msword") == RESUME_CATEGORY
    assert route_upload(DOCX) == RESUME_CATEGORY


def test_route_refuses_unknown_type():
    with pytest.raises(InvalidUploadError):
        route_upload("application/octet-stream")
    with pytest.raises(InvalidUploadError):
        route_upload(None)


def test_generated_filename_ignores_original_name():
    name = generate_filename("../../etc/Passwd.PNG")
    assert re.fullmatch(r"[0-9a-f]{32}\.png", name)


def test_generated_filenames_differ():
    names = {generate_filename("cv.pdf") for _ in range(100)}
    assert len(names) == 100
