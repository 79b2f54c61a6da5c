"""Share policy — decides whether a share link may be used right now.

Pure function of the record, the clock and the supplied password. Rules are
checked in order:

1. no record                                  -> DENIED(MISSING)
2. ``expires_at`` set and in the past         -> DENIED(EXPIRED)
3. ``download_count >= max_downloads``        -> DENIED(EXHAUSTED)
4. metadata-only request                      -> ALLOWED
5. password set, none supplied                -> PASSWORD_REQUIRED
6. password set, supplied value differs       -> DENIED(BAD_PASSWORD)
7. otherwise                                  -> ALLOWED

Side effects (removing expired links, counting downloads) belong to the
caller, see ``ShareService``.
"""

import secrets
from datetime import datetime

from database import from_db
from api.files.dto.file import FileRecord
from api.share.dto.share import AccessDecision, AccessStatus, DenialReason


def _denied(reason: DenialReason, record: FileRecord | None = None) -> AccessDecision:
    return AccessDecision(status=AccessStatus.DENIED, reason=reason, file=record)


def is_expired(record: FileRecord, now: datetime) -> bool:
    return record.expires_at is not None and from_db(now) > from_db(record.expires_at)


def is_exhausted(record: FileRecord) -> bool:
    return record.max_downloads is not None and record.download_count >= record.max_downloads


def password_matches(record: FileRecord, password: str | None) -> bool:
    if record.password is None:
        return True
    if password is None:
        return False
    return secrets.compare_digest(record.password.encode(), password.encode())


def evaluate(
    record: FileRecord | None,
    now: datetime,
    password: str | None = None,
    download: bool = True,
) -> AccessDecision:
    if record is None:
        return _denied(DenialReason.MISSING)

    if is_expired(record, now):
        return _denied(DenialReason.EXPIRED, record)

    if is_exhausted(record):
        return _denied(DenialReason.EXHAUSTED, record)

    if not download:
        return AccessDecision(status=AccessStatus.ALLOWED, file=record)

    if record.password is not None:
        if password is None:
            return AccessDecision(status=AccessStatus.PASSWORD_REQUIRED, file=record)
        if not password_matches(record, password):
            return _denied(DenialReason.BAD_PASSWORD, record)

    return AccessDecision(status=AccessStatus.ALLOWED, file=record)
