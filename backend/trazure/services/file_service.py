"""
Trazure Backend — Photo Storage Service
=========================================

What:  Validates and stores photos uploaded for footprints, and resolves
       paths under the uploads directory for serving.
Why:   Centralizes all file system operations with their safety checks.
How:   Validates extension, size and the MIME type sniffed from the bytes
       (python-magic), then writes them to a date-organized directory with a
       UUID filename.
Who:   Called by the /uploads routes.

Directory Structure:
    uploads/
    └── 2025/
        └── 06/
            └── 01/
                ├── a1b2c3d4-....jpg
                └── e5f6g7h8-....png

Safety:
    - UUID filenames: no user input ever reaches the file system path
    - Content sniffed with python-magic: a renamed non-image is rejected
    - resolve(): every served path must stay inside the uploads directory
"""

import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Tuple

import aiofiles
import magic

from trazure.exceptions import FileStorageError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".png", ".jpg", ".jpeg", ".webp"}
ALLOWED_MIME_TYPES = {"image/png", "image/jpeg", "image/webp"}


class FileService:
    """Manages upload validation, storage and lookup inside one directory."""

    def __init__(self, uploads_dir: Path, max_size: int):
        self.uploads_dir = Path(uploads_dir).resolve()
        self.max_size = max_size

    def ensure_directory(self) -> None:
        self.uploads_dir.mkdir(parents=True, exist_ok=True)

    def validate_extension(self, filename: str) -> str:
        """Returns the normalized extension (lowercase with dot)."""
        ext = Path(filename).suffix.lower()
        if ext not in ALLOWED_EXTENSIONS:
            raise ValidationError(
                message=(
                    f"File type '{ext}' is not supported. "
                    f"Allowed types: {', '.join(sorted(ALLOWED_EXTENSIONS))}"
                ),
                field="file",
                context={"extension": ext, "allowed": sorted(ALLOWED_EXTENSIONS)},
            )
        return ext

    def validate_size(self, content_length: Optional[int], actual_size: Optional[int] = None) -> None:
        """
        Check the upload size against max_size.

        content_length is the size reported before the body is read, so an
        oversized upload is refused without loading it. actual_size is the
        byte count once read.
        """
        max_mb = self.max_size / (1024 * 1024)

        if content_length and content_length > self.max_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size": self.max_size, "reported_size": content_length},
            )

        if actual_size is None:
            return
        if actual_size == 0:
            raise ValidationError(message="Uploaded file is empty.", field="file")
        if actual_size > self.max_size:
            raise ValidationError(
                message=f"File size exceeds maximum of {max_mb:.0f}MB.",
                field="file",
                context={"max_size": self.max_size, "actual_size": actual_size},
            )

    def validate_mime_type(self, content: bytes) -> str:
        """
        Detect the MIME type from the file's magic bytes.

        The client's filename and Content-Type header are not trusted: HTML
        renamed to .png is detected as text/html and rejected.

        Raises:
            ValidationError: Detected type is not an allowed image type
            FileStorageError: libmagic could not inspect the bytes
        """
        try:
            mime_type = magic.from_buffer(content, mime=True)
        except magic.MagicException as e:
            logger.error("MIME type detection failed: %s", str(e))
            raise FileStorageError(
                message="Could not verify file type. Please try again.",
                context={"error": str(e)},
            ) from e

        if mime_type not in ALLOWED_MIME_TYPES:
            raise ValidationError(
                message="Invalid file type. Please upload an image.",
                field="file",
                context={"mime_type": mime_type, "allowed": sorted(ALLOWED_MIME_TYPES)},
            )
        return mime_type

    def _generate_storage_path(self, extension: str) -> Tuple[Path, str]:
        date_dir = datetime.now(timezone.utc).strftime("%Y/%m/%d")
        relative_path = f"{date_dir}/{uuid.uuid4()}{extension}"
        return self.uploads_dir / relative_path, relative_path

    async def store(
        self,
        filename: str,
        content: bytes,
        content_length: Optional[int] = None,
    ) -> str:
        """
        Validate and write an upload; returns its path relative to uploads_dir.

        Raises:
            ValidationError: Wrong extension, bad size, content is not an image
            FileStorageError: Type detection or the write failed
        """
        ext = self.validate_extension(filename)
        self.validate_size(content_length, len(content))
        self.validate_mime_type(content)

        absolute_path, relative_path = self._generate_storage_path(ext)
        try:
            absolute_path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(absolute_path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", absolute_path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded photo. Please try again.",
                context={"path": str(absolute_path), "os_error": str(e)},
            ) from e

        logger.info("Upload stored: %s (%d bytes)", relative_path, len(content))
        return relative_path

    def resolve(self, relative_path: str) -> Path:
        """
        Map a URL path under /uploads to a file on disk.

        Raises:
            ValidationError: The path escapes the uploads directory
            NotFoundError: No such file
        """
        full_path = (self.uploads_dir / relative_path).resolve()
        if not full_path.is_relative_to(self.uploads_dir):
            raise ValidationError(message="Invalid file path", field="path")
        if not full_path.is_file():
            raise NotFoundError(resource="file", resource_id=relative_path)
        return full_path
