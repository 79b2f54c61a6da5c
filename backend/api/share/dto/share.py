"""Share Data Transfer Objects."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel

from api.dto import CamelModel
from api.files.dto.file import FileRecord


class AccessStatus(str, Enum):
    ALLOWED = "ALLOWED"
    PASSWORD_REQUIRED = "PASSWORD_REQUIRED"
    DENIED = "DENIED"


class DenialReason(str, Enum):
    MISSING = "MISSING"
    EXPIRED = "EXPIRED"
    EXHAUSTED = "EXHAUSTED"
    BAD_PASSWORD = "BAD_PASSWORD"


class AccessDecision(BaseModel):
    status: AccessStatus
    reason: DenialReason | None = None
    file: FileRecord | None = None

    @property
    def allowed(self) -> bool:
        return self.status == AccessStatus.ALLOWED


class SharedFileInfo(CamelModel):
    """Public metadata for a share link. Never carries the password."""

    id: str
    original_name: str
    size: int
    mime_type: str | None = None
    has_password: bool
    expires_at: datetime | None = None
    max_downloads: int | None = None
    download_count: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: FileRecord) -> "SharedFileInfo":
        return cls(
            id=record.id,
            original_name=record.original_name,
            size=record.size_bytes,
            mime_type=record.mime_type,
            has_password=record.password is not None,
            expires_at=record.expires_at,
            max_downloads=record.max_downloads,
            download_count=record.download_count,
            created_at=record.created_at,
        )


class PasswordCheckRequest(BaseModel):
    password: str | None = None


class PasswordCheckResponse(BaseModel):
    valid: bool
