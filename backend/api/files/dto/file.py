"""File Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel, Field

from api.dto import CamelModel


class FileRecord(BaseModel):
    """Full record as stored, password included. Never returned to clients."""

    id: str
    storage_key: str
    original_name: str
    size_bytes: int
    mime_type: str | None = None
    password: str | None = None
    expires_at: datetime | None = None
    max_downloads: int | None = None
    download_count: int = 0
    owner_user_id: str | None = None
    created_at: datetime
    updated_at: datetime


class FileSummary(CamelModel):
    id: str
    name: str
    original_name: str
    size: int
    mime_type: str | None = None
    has_password: bool
    expires_at: datetime | None = None
    max_downloads: int | None = None
    download_count: int
    created_at: datetime
    user_id: str | None = None

    @classmethod
    def from_record(cls, record: FileRecord) -> "FileSummary":
        return cls(
            id=record.id,
            name=record.storage_key,
            original_name=record.original_name,
            size=record.size_bytes,
            mime_type=record.mime_type,
            has_password=record.password is not None,
            expires_at=record.expires_at,
            max_downloads=record.max_downloads,
            download_count=record.download_count,
            created_at=record.created_at,
            user_id=record.owner_user_id,
        )


class FileListResponse(BaseModel):
    files: list[FileSummary]


class PurgeRequest(CamelModel):
    confirm_code: str = ""


class PurgeResult(CamelModel):
    success: bool = True
    deleted_count: int = 0
    error_count: int = 0
    message: str = ""


class CleanupResponse(BaseModel):
    success: bool = True
    deleted: int
    files: list[str] = Field(default_factory=list)
