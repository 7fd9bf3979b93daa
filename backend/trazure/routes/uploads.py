"""
Trazure Backend — Upload Route Handlers
=========================================

What:  POST /uploads stores a footprint photo; GET /uploads/{path} serves
       files from the uploads directory.
How:   Both delegate to the FileService built from WebConfig at startup
       (request.app.state.file_service).
"""

import logging

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import FileResponse

from trazure.schemas.common import ErrorResponse, UploadResponse
from trazure.services.file_service import FileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/uploads", tags=["Uploads"])


def _file_service(request: Request) -> FileService:
    return request.app.state.file_service


@router.post(
    "",
    status_code=201,
    response_model=UploadResponse,
    responses={
        400: {"description": "Invalid file type or size", "model": ErrorResponse},
        500: {"description": "Storage error", "model": ErrorResponse},
    },
    summary="Upload a footprint photo",
)
async def upload_photo(
    request: Request,
    file: UploadFile = File(..., description="Photo (PNG, JPG, JPEG or WEBP)"),
) -> UploadResponse:
    file_service = _file_service(request)
    logger.info(
        "Received upload: filename=%s, reported size=%s bytes",
        file.filename or "unknown",
        file.size,
    )
    try:
        # Refuse oversized uploads before reading them into memory
        file_service.validate_size(file.size)
        content = await file.read()
        relative_path = await file_service.store(
            filename=file.filename or "",
            content=content,
            content_length=file.size,
        )
    finally:
        await file.close()

    return UploadResponse(path=relative_path, url=f"/uploads/{relative_path}")


@router.get(
    "/{file_path:path}",
    responses={
        200: {"description": "The stored file"},
        400: {"description": "Invalid path", "model": ErrorResponse},
        404: {"description": "File not found", "model": ErrorResponse},
    },
    summary="Serve an uploaded file",
)
async def serve_upload(file_path: str, request: Request) -> FileResponse:
    full_path = _file_service(request).resolve(file_path)
    return FileResponse(
        path=str(full_path),
        headers={"Cache-Control": "public, max-age=86400"},
    )
