"""Placement of uploaded documents under the uploads directory."""
from __future__ import annotations

from pathlib import Path
import logging
import os

from docshop.core.codes import new_id, now_ms
from docshop.core.config import get_settings
from docshop.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

UPLOADS_PREFIX = "/uploads/"


class UploadService:
    def __init__(self, uploads_dir: str | Path | None = None) -> None:
        self.uploads_dir = Path(uploads_dir or get_settings().uploads_dir)

    def store(self, original_name: str | None, data: bytes) -> str:
        """Write the bytes under a generated name and return its file reference."""
        if not data:
            raise ValidationError("Thiếu file")
        if len(data) > get_settings().max_upload_bytes:
            raise ValidationError("File quá lớn")
        ext = os.path.splitext(original_name or "")[1].lower()
        filename = f"{now_ms()}-{new_id()}{ext}"
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        (self.uploads_dir / filename).write_bytes(data)
        logger.info("Stored upload %s (%d bytes)", filename, len(data))
        return UPLOADS_PREFIX + filename

    def resolve(self, file_ref: str) -> Path:
        """Filesystem path for a stored reference; only bare names are honoured."""
        name = Path((file_ref or "").removeprefix(UPLOADS_PREFIX)).name
        path = self.uploads_dir / name
        if not name or not path.is_file():
            raise NotFoundError("Không tìm thấy file")
        return path

    def discard(self, file_ref: str) -> None:
        """Remove a stored file that no catalog item ended up referencing."""
        name = Path((file_ref or "").removeprefix(UPLOADS_PREFIX)).name
        if not name:
            return
        try:
            (self.uploads_dir / name).unlink()
        except FileNotFoundError:
            return
        logger.info("Discarded upload %s", name)
