"""Cleanup — removes expired and max-downloaded files.

Run standalone: python cleanup.py
Meant for an external cron; the API exposes the same run at /api/cleanup.
"""

from datetime import datetime

from database import utcnow
from errors import StorageIOError
from logging_config import get_logger
from storage import ArtifactStore
from api.auth.repositories.sessions_repository import SessionsRepository
from api.files.repositories.files_repository import FilesRepository

logger = get_logger(__name__)


class ExpirySweeper:
    def __init__(
        self,
        repository: FilesRepository,
        artifacts: ArtifactStore,
        sessions: SessionsRepository | None = None,
    ):
        self.repository = repository
        self.artifacts = artifacts
        self.sessions = sessions

    def sweep(self, now: datetime | None = None) -> list[str]:
        """Delete expired and exhausted files. Returns the removed ids.

        An artifact that cannot be deleted is logged and skipped; its row is
        dropped anyway so the link stops resolving.
        """
        now = now or utcnow()
        removed = []

        for record in self.repository.list_sweepable(now):
            try:
                self.artifacts.delete(record.storage_key)
            except StorageIOError:
                logger.exception("Could not delete artifact %s", record.storage_key)
            self.repository.delete(record.id)
            removed.append(record.id)

        if removed:
            logger.info("Swept %d file(s): %s", len(removed), ", ".join(removed))
        return removed

    def run_cleanup(self, now: datetime | None = None) -> list[str]:
        """Sweep files, then forget expired sessions."""
        now = now or utcnow()
        removed = self.sweep(now)
        if self.sessions is not None:
            count = self.sessions.delete_expired(now)
            if count:
                logger.info("Dropped %d expired session(s)", count)
        return removed


if __name__ == "__main__":
    from config import DATABASE_URL, FILES_DIR
    from database import Database

    db = Database(DATABASE_URL)
    db.init_db()
    sweeper = ExpirySweeper(
        FilesRepository(db), ArtifactStore(FILES_DIR), SessionsRepository(db)
    )
    sweeper.run_cleanup()
    db.dispose()
