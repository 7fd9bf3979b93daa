"""
Trazure Backend — File Service Unit Tests
===========================================

What:  Tests for FileService validation, storage and path resolution.
How:   Each test gets its own uploads directory under tmp_path. MIME
       detection runs the real libmagic on small byte strings.

Test Strategy:
    ✅ Allowed extensions (.png, .jpg, .jpeg, .webp), case-insensitive
    ✅ Rejected extensions (.gif, .pdf, .exe, none)
    ✅ Content type is sniffed from the bytes, not taken from the client
    ✅ Size limits (reported size, empty, at limit, over limit)
    ✅ store() writes under a date directory with a UUID name
    ✅ resolve() refuses paths outside the uploads directory
"""

import re
from unittest.mock import patch

import magic
import pytest

from trazure.exceptions import FileStorageError, NotFoundError, ValidationError
from trazure.services.file_service import FileService

JPEG_BYTES = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00\xff\xd9"


class TestFileValidation:
    """Tests for the individual validation steps."""

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.service = FileService(uploads_dir=tmp_path / "uploads", max_size=1024)

    # ── Extension Validation ──────────────────────────────────────────────

    @pytest.mark.parametrize("filename", ["a.png", "a.jpg", "a.jpeg", "a.webp", "A.JPG", "b.Png"])
    def test_allowed_extensions(self, filename):
        assert self.service.validate_extension(filename) == filename[filename.rindex("."):].lower()

    @pytest.mark.parametrize("filename", ["animation.gif", "document.pdf", "malware.exe", "noextension"])
    def test_rejected_extensions(self, filename):
        with pytest.raises(ValidationError, match="not supported") as exc_info:
            self.service.validate_extension(filename)
        assert exc_info.value.field == "file"

    # ── MIME Type Detection ───────────────────────────────────────────────

    def test_png_bytes_detected(self, sample_image_bytes):
        assert self.service.validate_mime_type(sample_image_bytes) == "image/png"

    def test_jpeg_bytes_detected(self):
        assert self.service.validate_mime_type(JPEG_BYTES) == "image/jpeg"

    @pytest.mark.parametrize(
        "content",
        [
            b"<html><script>alert(1)</script></html>",
            b"just some notes\n",
            b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n",
        ],
    )
    def test_non_image_bytes_rejected(self, content):
        with pytest.raises(ValidationError, match="upload an image") as exc_info:
            self.service.validate_mime_type(content)
        assert exc_info.value.context["mime_type"] not in {"image/png", "image/jpeg", "image/webp"}

    def test_detection_failure_is_storage_error(self, sample_image_bytes):
        with patch(
            "trazure.services.file_service.magic.from_buffer",
            side_effect=magic.MagicException("no magic database"),
        ):
            with pytest.raises(FileStorageError, match="Could not verify"):
                self.service.validate_mime_type(sample_image_bytes)

    # ── Size Validation ───────────────────────────────────────────────────

    def test_size_within_limit(self):
        self.service.validate_size(512, 512)

    def test_size_at_limit(self):
        self.service.validate_size(1024, 1024)

    def test_reported_size_over_limit_rejected_before_reading(self):
        with pytest.raises(ValidationError, match="exceeds maximum") as exc_info:
            self.service.validate_size(4096)
        assert exc_info.value.context["reported_size"] == 4096

    def test_unknown_reported_size_passes(self):
        self.service.validate_size(None)

    def test_actual_size_over_limit(self):
        with pytest.raises(ValidationError, match="exceeds maximum") as exc_info:
            self.service.validate_size(None, 1025)
        assert exc_info.value.context["actual_size"] == 1025

    def test_empty_file(self):
        with pytest.raises(ValidationError, match="empty"):
            self.service.validate_size(0, 0)


class TestStoreAndResolve:
    """Tests for writing uploads and mapping URL paths back to files."""

    @pytest.fixture(autouse=True)
    def _service(self, tmp_path):
        self.uploads = tmp_path / "uploads"
        self.service = FileService(uploads_dir=self.uploads, max_size=1024)

    @pytest.mark.asyncio
    async def test_store_writes_date_organized_file(self, sample_image_bytes):
        relative_path = await self.service.store("beach.PNG", sample_image_bytes)

        assert re.fullmatch(r"\d{4}/\d{2}/\d{2}/[0-9a-f-]{36}\.png", relative_path)
        assert (self.uploads / relative_path).read_bytes() == sample_image_bytes

    @pytest.mark.asyncio
    async def test_store_never_uses_client_filename(self, sample_image_bytes):
        relative_path = await self.service.store("../../etc/passwd.png", sample_image_bytes)

        assert "passwd" not in relative_path
        assert self.service.resolve(relative_path).is_relative_to(self.uploads.resolve())

    @pytest.mark.asyncio
    async def test_store_validates_before_writing(self):
        with pytest.raises(ValidationError):
            await self.service.store("notes.txt", b"hello")

        assert not self.uploads.exists()

    @pytest.mark.asyncio
    async def test_store_rejects_renamed_html(self):
        with pytest.raises(ValidationError, match="upload an image"):
            await self.service.store("evil.png", b"<html><script>alert(1)</script></html>")

        assert not self.uploads.exists()

    @pytest.mark.asyncio
    async def test_store_os_error_becomes_file_storage_error(self, sample_image_bytes):
        with patch("trazure.services.file_service.aiofiles.open", side_effect=OSError("disk full")):
            with pytest.raises(FileStorageError) as exc_info:
                await self.service.store("beach.png", sample_image_bytes)

        assert exc_info.value.context["os_error"] == "disk full"

    @pytest.mark.asyncio
    async def test_resolve_returns_stored_file(self):
        relative_path = await self.service.store("beach.jpg", JPEG_BYTES)

        assert self.service.resolve(relative_path) == (self.uploads / relative_path).resolve()

    def test_resolve_rejects_traversal(self):
        self.service.ensure_directory()

        with pytest.raises(ValidationError, match="Invalid file path"):
            self.service.resolve("../outside.png")

    def test_resolve_missing_file(self):
        self.service.ensure_directory()

        with pytest.raises(NotFoundError):
            self.service.resolve("2025/01/01/missing.png")
