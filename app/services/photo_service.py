"""
Photo upload service
"""

import logging
import os
import secrets
import time
from datetime import datetime
from typing import Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.errors import PersistenceError, ValidationError
from app.models import Photo
from app.schemas.photo import PhotoResponse
from app.services.repositories import PhotoRepo
from app.services.voting_service import to_photo_response

logger = logging.getLogger(__name__)

ALLOWED_EXTENSIONS = {".jpeg", ".jpg", ".png", ".gif", ".webp"}
ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}

UPLOAD_URL_PREFIX = "/uploads"
UPLOAD_CHUNK_SIZE = 64 * 1024


class PhotoService:
    """Service for storing uploaded photos"""

    @staticmethod
    def validate_upload(original_filename: Optional[str], content_type: Optional[str], size: int) -> str:
        """Check type and size; returns the lower-cased file extension"""
        if not original_filename:
            raise ValidationError("请选择要上传的照片")

        ext = os.path.splitext(original_filename)[1].lower()
        if ext not in ALLOWED_EXTENSIONS or (content_type or "").lower() not in ALLOWED_MIME_TYPES:
            raise ValidationError("只允许上传图片文件 (jpeg, jpg, png, gif, webp)")

        if size == 0:
            raise ValidationError("请选择要上传的照片")
        if size > settings.MAX_UPLOAD_SIZE:
            raise ValidationError(
                f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB"
            )
        return ext

    @staticmethod
    async def read_upload(upload: UploadFile) -> bytes:
        """Read an upload in chunks, stopping once it passes MAX_UPLOAD_SIZE"""
        chunks = []
        size = 0
        while size <= settings.MAX_UPLOAD_SIZE:
            chunk = await upload.read(UPLOAD_CHUNK_SIZE)
            if not chunk:
                break
            chunks.append(chunk)
            size += len(chunk)
        return b"".join(chunks)

    @staticmethod
    def generate_filename(ext: str) -> str:
        return f"photo-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"

    @staticmethod
    def save_upload(
        db: Session,
        content: bytes,
        original_filename: Optional[str],
        content_type: Optional[str],
        uploader_ip: str,
    ) -> PhotoResponse:
        """Validate, write to the upload directory and record the photo.

        The written file is removed again if the database insert fails.
        """
        ext = PhotoService.validate_upload(original_filename, content_type, len(content))

        os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
        filename = PhotoService.generate_filename(ext)
        disk_path = os.path.join(settings.UPLOAD_DIR, filename)
        with open(disk_path, "wb") as f:
            f.write(content)

        now = datetime.utcnow()
        photo = Photo(
            id=f"photo-{int(time.time() * 1000)}-{secrets.token_hex(5)}",
            filename=filename,
            original_filename=original_filename,
            file_path=f"{UPLOAD_URL_PREFIX}/{filename}",
            uploader_ip=uploader_ip,
            vote_count=0,
            created_at=now,
            updated_at=now,
        )
        try:
            photo = PhotoRepo.create(db, photo)
        except PersistenceError:
            logger.error(f"Failed to record photo {filename}, removing file")
            os.remove(disk_path)
            raise

        logger.info(f"Photo {photo.id} uploaded by {uploader_ip}")
        return to_photo_response(photo)
