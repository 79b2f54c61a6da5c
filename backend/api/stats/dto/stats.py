"""Stats Data Transfer Objects."""

from pydantic import BaseModel

from api.dto import CamelModel


class QuotaSnapshot(BaseModel):
    used_bytes: int
    max_bytes: int
    percent: int


class DiskUsage(BaseModel):
    total: int = 0
    used: int = 0
    available: int = 0
    percent: int = 0


class StatsResponse(CamelModel):
    total_storage: int
    max_storage: int
    storage_percent: int
    files_count: int
    users_count: int
    disk_total: int
    disk_used: int
    disk_available: int
    disk_percent: int
