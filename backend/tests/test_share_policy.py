from datetime import datetime, timedelta, timezone

import pytest

from api.files.dto.file import FileRecord
from api.share.dto.share import AccessStatus, DenialReason, SharedFileInfo
from api.share.services.share_policy import evaluate, is_exhausted, is_expired

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


def _record(**overrides) -> FileRecord:
    values = dict(
        id="abc123",
        storage_key="abc123-notes.txt",
        original_name="notes.txt",
        size_bytes=42,
        mime_type="text/plain",
        created_at=NOW - timedelta(days=1),
        updated_at=NOW - timedelta(days=1),
    )
    values.update(overrides)
    return FileRecord(**values)


def test_missing_record_is_denied():
    decision = evaluate(None, NOW)
    assert decision.status == AccessStatus.DENIED
    assert decision.reason == DenialReason.MISSING
    assert decision.file is None


def test_plain_record_is_allowed():
    decision = evaluate(_record(), NOW)
    assert decision.allowed
    assert decision.reason is None


def test_expired_record_is_denied_even_for_metadata():
    record = _record(expires_at=NOW - timedelta(seconds=1))
    assert evaluate(record, NOW).reason == DenialReason.EXPIRED
    assert evaluate(record, NOW, download=False).reason == DenialReason.EXPIRED


def test_expiry_instant_itself_is_still_valid():
    record = _record(expires_at=NOW)
    assert evaluate(record, NOW).allowed


def test_naive_timestamps_are_treated_as_utc():
    record = _record(expires_at=datetime(2026, 1, 15, 11, 0))
    assert is_expired(record, NOW)


def test_exhausted_record_is_denied():
    record = _record(max_downloads=3, download_count=3)
    decision = evaluate(record, NOW)
    assert decision.status == AccessStatus.DENIED
    assert decision.reason == DenialReason.EXHAUSTED
    assert is_exhausted(record)


def test_expiry_wins_over_exhaustion():
    record = _record(expires_at=NOW - timedelta(hours=1), max_downloads=1, download_count=1)
    assert evaluate(record, NOW).reason == DenialReason.EXPIRED


def test_below_ceiling_is_allowed():
    record = _record(max_downloads=3, download_count=2)
    assert evaluate(record, NOW).allowed


def test_metadata_view_skips_password_check():
    record = _record(password="p")
    decision = evaluate(record, NOW, download=False)
    assert decision.allowed

    info = SharedFileInfo.from_record(decision.file)
    body = info.model_dump(by_alias=True)
    assert body["hasPassword"] is True
    assert "password" not in body
    assert "p" not in body.values()


@pytest.mark.parametrize(
    "password,status,reason",
    [
        (None, AccessStatus.PASSWORD_REQUIRED, None),
        ("wrong", AccessStatus.DENIED, DenialReason.BAD_PASSWORD),
        ("p", AccessStatus.ALLOWED, None),
    ],
)
def test_password_protected_download(password, status, reason):
    decision = evaluate(_record(password="p"), NOW, password=password)
    assert decision.status == status
    assert decision.reason == reason


def test_password_is_ignored_for_unprotected_record():
    assert evaluate(_record(), NOW, password="anything").allowed
