"""Upload Data Transfer Objects."""

from datetime import datetime

from api.dto import CamelModel


class UploadResponse(CamelModel):
    success: bool = True
    id: str
    filename: str
    original_name: str
    size: int
    expires_at: datetime | None = None
    max_downloads: int | None = None
    has_password: bool
    url: str
