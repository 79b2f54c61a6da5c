"""Stats service — storage quota accounting and instance figures."""

import shutil
from pathlib import Path

from logging_config import get_logger
from api.files.repositories.files_repository import FilesRepository
from api.setup.services.setup_service import SetupService
from api.stats.dto.stats import DiskUsage, QuotaSnapshot, StatsResponse
from api.users.repositories.users_repository import UsersRepository

logger = get_logger(__name__)


def percent_of(used: int, total: int) -> int:
    """Whole percentage, halves rounded up; 0 when there is no total."""
    if total <= 0:
        return 0
    return int(used * 100 / total + 0.5)


def disk_usage(path: Path) -> DiskUsage:
    try:
        usage = shutil.disk_usage(path)
    except OSError as e:
        logger.warning("Could not read disk usage for %s: %s", path, e)
        return DiskUsage()
    return DiskUsage(
        total=usage.total,
        used=usage.used,
        available=usage.free,
        percent=percent_of(usage.used, usage.total),
    )


class QuotaAccountant:
    """Used vs configured storage. Informational only, uploads are never blocked."""

    def __init__(self, files: FilesRepository, setup: SetupService):
        self.files = files
        self.setup = setup

    def current_usage(self) -> QuotaSnapshot:
        used = self.files.sum_sizes()
        max_bytes = self.setup.get_max_storage()
        return QuotaSnapshot(used_bytes=used, max_bytes=max_bytes, percent=percent_of(used, max_bytes))


class StatsService:
    def __init__(
        self,
        quota: QuotaAccountant,
        files: FilesRepository,
        users: UsersRepository,
        storage_root: Path,
    ):
        self.quota = quota
        self.files = files
        self.users = users
        self.storage_root = storage_root

    def get_stats(self) -> StatsResponse:
        snapshot = self.quota.current_usage()
        disk = disk_usage(self.storage_root)
        return StatsResponse(
            total_storage=snapshot.used_bytes,
            max_storage=snapshot.max_bytes,
            storage_percent=snapshot.percent,
            files_count=self.files.count(),
            users_count=self.users.count(),
            disk_total=disk.total,
            disk_used=disk.used,
            disk_available=disk.available,
            disk_percent=disk.percent,
        )
