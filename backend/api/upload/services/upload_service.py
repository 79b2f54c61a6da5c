"""Upload service — handles file upload logic."""

import mimetypes
import re
import secrets
from datetime import datetime, timedelta

from fastapi import UploadFile

from config import CHUNK_SIZE, FILE_ID_LENGTH, MAX_FILE_SIZE
from database import utcnow
from errors import ValidationError
from logging_config import get_logger
from storage import ArtifactStore
from api.auth.dto.auth import Identity
from api.files.dto.file import FileRecord
from api.files.repositories.files_repository import FilesRepository

logger = get_logger(__name__)

MAX_SAFE_NAME_LENGTH = 100


def parse_expiry(expiry_str: str | None, now: datetime | None = None) -> datetime | None:
    """Parse an expiry like '7' (days), '30m', '2h', '3d' or '1w' into a datetime.

    Empty or zero means the link never expires.
    """
    if not expiry_str or not expiry_str.strip():
        return None
    now = now or utcnow()
    value = expiry_str.strip().lower()

    if value.isdigit():
        days = int(value)
        return now + timedelta(days=days) if days > 0 else None

    match = re.match(r"^(\d+)([mhdw])$", value)
    if not match:
        raise ValidationError(f"Invalid expiry: {expiry_str}")

    amount = int(match.group(1))
    unit = match.group(2)

    deltas = {
        "m": timedelta(minutes=amount),
        "h": timedelta(hours=amount),
        "d": timedelta(days=amount),
        "w": timedelta(weeks=amount),
    }

    return now + deltas[unit] if amount > 0 else None


def parse_max_downloads(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        max_downloads = int(value)
    except ValueError:
        raise ValidationError("maxDownloads must be a whole number")
    if max_downloads < 1:
        raise ValidationError("maxDownloads must be at least 1")
    return max_downloads


def safe_name(filename: str) -> str:
    return re.sub(r"[^a-zA-Z0-9._-]", "_", filename)[:MAX_SAFE_NAME_LENGTH] or "file"


def guess_mime_type(filename: str) -> str:
    content_type, _ = mimetypes.guess_type(filename)
    return content_type or "application/octet-stream"


class UploadService:
    def __init__(
        self,
        repository: FilesRepository,
        artifacts: ArtifactStore,
        max_file_size: int = MAX_FILE_SIZE,
    ):
        self.repository = repository
        self.artifacts = artifacts
        self.max_file_size = max_file_size

    def generate_id(self, length: int = FILE_ID_LENGTH) -> str:
        """Generate a unique random id for the share link."""
        while True:
            file_id = secrets.token_urlsafe(length)[:length]
            if not self.repository.id_exists(file_id):
                return file_id

    async def save_upload(
        self,
        file: UploadFile,
        owner: Identity,
        password: str | None = None,
        expires_in: str | None = None,
        max_downloads: str | None = None,
    ) -> FileRecord:
        """Stream the upload to disk, then create its record.

        Storage quota is reported elsewhere but not enforced here.
        """
        if not file or not file.filename:
            raise ValidationError("No file provided")

        now = utcnow()
        expires_at = parse_expiry(expires_in, now)
        max_dl = parse_max_downloads(max_downloads)

        original_name = file.filename
        file_id = self.generate_id()
        storage_key = f"{file_id}-{safe_name(original_name)}"

        size = 0
        try:
            with self.artifacts.open_write(storage_key) as out:
                while chunk := await file.read(CHUNK_SIZE):
                    size += len(chunk)
                    if self.max_file_size and size > self.max_file_size:
                        raise ValidationError(
                            f"File exceeds max size of {self.max_file_size} bytes"
                        )
                    out.write(chunk)
            record = self.repository.insert(
                id=file_id,
                storage_key=storage_key,
                original_name=original_name,
                size_bytes=size,
                mime_type=guess_mime_type(original_name),
                password=password or None,
                expires_at=expires_at,
                max_downloads=max_dl,
                owner_user_id=owner.id,
                created_at=now,
            )
        except Exception:
            self.artifacts.delete(storage_key)
            raise

        logger.info("Stored %s (%d bytes) for %s", record.id, size, owner.username)
        return record
