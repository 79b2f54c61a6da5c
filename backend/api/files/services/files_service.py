"""Files service — business logic for file management."""

from config import PURGE_CONFIRMATION
from errors import NotFoundError, ValidationError
from logging_config import get_logger
from storage import ArtifactStore
from api.auth.dto.auth import Identity
from api.files.dto.file import FileRecord, FileSummary, PurgeResult
from api.files.repositories.files_repository import FilesRepository

logger = get_logger(__name__)


def remove_artifact_and_record(
    repository: FilesRepository, artifacts: ArtifactStore, record: FileRecord
) -> None:
    """Delete the bytes first, then the row.

    A crash in between leaves a row without bytes, which heals itself on the
    next access, rather than bytes nobody accounts for.
    """
    artifacts.delete(record.storage_key)
    repository.delete(record.id)


class FilesService:
    def __init__(
        self,
        repository: FilesRepository,
        artifacts: ArtifactStore,
        purge_confirmation: str = PURGE_CONFIRMATION,
    ):
        self.repository = repository
        self.artifacts = artifacts
        self.purge_confirmation = purge_confirmation

    def list_files(self, identity: Identity) -> list[FileSummary]:
        if identity.is_admin:
            records = self.repository.list_all()
        else:
            records = self.repository.list_by_owner(identity.id)
        return [FileSummary.from_record(r) for r in records]

    def get_owned(self, storage_key: str, identity: Identity) -> FileRecord:
        """Look up a file the caller may manage.

        Someone else's file is reported exactly like a missing one.
        """
        record = self.repository.get_by_storage_key(storage_key)
        if not record:
            raise NotFoundError()
        if not identity.is_admin and record.owner_user_id != identity.id:
            raise NotFoundError()
        return record

    def open_owner_download(self, storage_key: str, identity: Identity) -> FileRecord:
        record = self.get_owned(storage_key, identity)
        if not self.artifacts.exists(record.storage_key):
            logger.warning("Artifact %s missing, dropping record %s", record.storage_key, record.id)
            self.repository.delete(record.id)
            raise NotFoundError()
        self.repository.increment_download(record.id)
        return record

    def delete_file(self, storage_key: str, identity: Identity) -> None:
        record = self.get_owned(storage_key, identity)
        remove_artifact_and_record(self.repository, self.artifacts, record)
        logger.info("File %s deleted by %s", record.id, identity.username)

    def purge_all(self, token: str) -> PurgeResult:
        """Delete every file. Per-item failures are counted, never fatal,
        so running the purge again picks up whatever was left behind."""
        if token != self.purge_confirmation:
            raise ValidationError("Incorrect confirmation code")

        deleted_count = 0
        error_count = 0
        for record in self.repository.list_all():
            try:
                remove_artifact_and_record(self.repository, self.artifacts, record)
                deleted_count += 1
            except Exception:
                logger.exception("Purge failed for file %s", record.id)
                error_count += 1

        logger.info("Purge removed %d file(s), %d error(s)", deleted_count, error_count)
        return PurgeResult(
            deleted_count=deleted_count,
            error_count=error_count,
            message=f"{deleted_count} file(s) deleted",
        )
