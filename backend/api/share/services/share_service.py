"""Share service — share-link access and download accounting."""

from datetime import datetime

from database import utcnow
from errors import (
    BadPasswordError,
    ExhaustedError,
    ExpiredError,
    NotFoundError,
    PasswordRequiredError,
    StorageIOError,
)
from logging_config import get_logger
from storage import ArtifactStore
from api.files.dto.file import FileRecord
from api.files.repositories.files_repository import FilesRepository
from api.files.services.files_service import remove_artifact_and_record
from api.share.dto.share import AccessDecision, AccessStatus, DenialReason, SharedFileInfo
from api.share.services import share_policy

logger = get_logger(__name__)

_DENIAL_ERRORS = {
    DenialReason.MISSING: NotFoundError,
    DenialReason.EXPIRED: ExpiredError,
    DenialReason.EXHAUSTED: ExhaustedError,
    DenialReason.BAD_PASSWORD: BadPasswordError,
}


def raise_for_decision(decision: AccessDecision) -> None:
    if decision.status == AccessStatus.PASSWORD_REQUIRED:
        raise PasswordRequiredError()
    if decision.status == AccessStatus.DENIED:
        raise _DENIAL_ERRORS[decision.reason]()


class ShareService:
    def __init__(self, repository: FilesRepository, artifacts: ArtifactStore):
        self.repository = repository
        self.artifacts = artifacts

    def evaluate_access(
        self,
        file_id: str,
        now: datetime | None = None,
        password: str | None = None,
        download: bool = False,
    ) -> AccessDecision:
        """Evaluate the share policy; an expired link is removed on sight."""
        record = self.repository.get_by_id(file_id)
        decision = share_policy.evaluate(record, now or utcnow(), password, download)

        if decision.reason == DenialReason.EXPIRED:
            try:
                remove_artifact_and_record(self.repository, self.artifacts, record)
                logger.info("Share %s expired, removed", file_id)
            except StorageIOError:
                # The sweeper drops the row regardless on its next run
                logger.exception("Could not remove expired share %s", file_id)

        return decision

    def get_info(self, file_id: str, now: datetime | None = None) -> SharedFileInfo:
        decision = self.evaluate_access(file_id, now=now, download=False)
        raise_for_decision(decision)
        return SharedFileInfo.from_record(decision.file)

    def record_download(self, file_id: str) -> bool:
        return self.repository.record_download(file_id)

    def open_download(
        self, file_id: str, password: str | None = None, now: datetime | None = None
    ) -> FileRecord:
        """Authorize one content transfer and count it.

        Returns the record to stream; raises the matching error otherwise.
        """
        decision = self.evaluate_access(file_id, now=now, password=password, download=True)
        raise_for_decision(decision)
        record = decision.file

        if not self.artifacts.exists(record.storage_key):
            logger.warning("Artifact %s missing, dropping share %s", record.storage_key, file_id)
            self.repository.delete(record.id)
            raise NotFoundError()

        # Another request may have taken the last download in the meantime
        if not self.record_download(record.id):
            raise ExhaustedError()

        return record

    def verify_password(self, file_id: str, password: str | None) -> bool:
        record = self.repository.get_by_id(file_id)
        if not record:
            raise NotFoundError()
        return share_policy.password_matches(record, password)
