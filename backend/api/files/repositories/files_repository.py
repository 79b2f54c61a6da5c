"""Files repository — data access layer."""

from datetime import datetime

from sqlalchemy import and_, func, or_

from database import Database, from_db, to_db, utcnow
from api.files.orm.file_model import FileModel
from api.files.dto.file import FileRecord

UPDATABLE_FIELDS = {"original_name", "password", "expires_at", "max_downloads", "owner_user_id"}


def _model_to_dto(model: FileModel) -> FileRecord:
    return FileRecord(
        id=model.id,
        storage_key=model.storage_key,
        original_name=model.original_name,
        size_bytes=model.size_bytes or 0,
        mime_type=model.mime_type,
        password=model.password,
        expires_at=from_db(model.expires_at),
        max_downloads=model.max_downloads,
        download_count=model.download_count or 0,
        owner_user_id=model.owner_user_id,
        created_at=from_db(model.created_at),
        updated_at=from_db(model.updated_at),
    )


class FilesRepository:
    """Record store for file metadata. Every method is one short session."""

    def __init__(self, db: Database):
        self._db = db

    def _get_session(self):
        return self._db.session()

    def insert(
        self,
        id: str,
        storage_key: str,
        original_name: str,
        size_bytes: int,
        mime_type: str | None = None,
        password: str | None = None,
        expires_at: datetime | None = None,
        max_downloads: int | None = None,
        owner_user_id: str | None = None,
        created_at: datetime | None = None,
    ) -> FileRecord:
        now = to_db(created_at or utcnow())
        with self._get_session() as session:
            model = FileModel(
                id=id,
                storage_key=storage_key,
                original_name=original_name,
                size_bytes=size_bytes,
                mime_type=mime_type,
                password=password,
                expires_at=to_db(expires_at),
                max_downloads=max_downloads,
                download_count=0,
                owner_user_id=owner_user_id,
                created_at=now,
                updated_at=now,
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return _model_to_dto(model)

    def get_by_id(self, id: str) -> FileRecord | None:
        with self._get_session() as session:
            model = session.query(FileModel).filter_by(id=id).first()
            return _model_to_dto(model) if model else None

    def get_by_storage_key(self, storage_key: str) -> FileRecord | None:
        with self._get_session() as session:
            model = session.query(FileModel).filter_by(storage_key=storage_key).first()
            return _model_to_dto(model) if model else None

    def id_exists(self, id: str) -> bool:
        with self._get_session() as session:
            return session.query(FileModel.id).filter_by(id=id).first() is not None

    def list_all(self) -> list[FileRecord]:
        with self._get_session() as session:
            models = session.query(FileModel).order_by(FileModel.created_at.desc()).all()
            return [_model_to_dto(m) for m in models]

    def list_by_owner(self, user_id: str) -> list[FileRecord]:
        with self._get_session() as session:
            models = (
                session.query(FileModel)
                .filter_by(owner_user_id=user_id)
                .order_by(FileModel.created_at.desc())
                .all()
            )
            return [_model_to_dto(m) for m in models]

    def update(self, id: str, **fields) -> FileRecord | None:
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        with self._get_session() as session:
            model = session.query(FileModel).filter_by(id=id).first()
            if not model:
                return None
            for key, value in fields.items():
                setattr(model, key, to_db(value) if key == "expires_at" else value)
            model.updated_at = to_db(utcnow())
            session.commit()
            session.refresh(model)
            return _model_to_dto(model)

    def delete(self, id: str) -> bool:
        with self._get_session() as session:
            deleted = session.query(FileModel).filter_by(id=id).delete()
            session.commit()
            return deleted > 0

    def record_download(self, id: str) -> bool:
        """Count one download unless the ceiling is already reached.

        Check and increment happen in a single UPDATE, so two concurrent
        requests can never both take the last permitted download.
        """
        with self._get_session() as session:
            updated = (
                session.query(FileModel)
                .filter(
                    FileModel.id == id,
                    or_(
                        FileModel.max_downloads.is_(None),
                        FileModel.download_count < FileModel.max_downloads,
                    ),
                )
                .update(
                    {
                        FileModel.download_count: FileModel.download_count + 1,
                        FileModel.updated_at: to_db(utcnow()),
                    },
                    synchronize_session=False,
                )
            )
            session.commit()
            return updated > 0

    def increment_download(self, id: str) -> bool:
        with self._get_session() as session:
            updated = (
                session.query(FileModel)
                .filter(FileModel.id == id)
                .update(
                    {
                        FileModel.download_count: FileModel.download_count + 1,
                        FileModel.updated_at: to_db(utcnow()),
                    },
                    synchronize_session=False,
                )
            )
            session.commit()
            return updated > 0

    def clear_owner(self, user_id: str) -> int:
        with self._get_session() as session:
            updated = (
                session.query(FileModel)
                .filter(FileModel.owner_user_id == user_id)
                .update(
                    {FileModel.owner_user_id: None, FileModel.updated_at: to_db(utcnow())},
                    synchronize_session=False,
                )
            )
            session.commit()
            return updated

    def list_sweepable(self, now: datetime) -> list[FileRecord]:
        """Expired records and records whose download ceiling is reached."""
        with self._get_session() as session:
            models = (
                session.query(FileModel)
                .filter(
                    or_(
                        and_(FileModel.expires_at.isnot(None), FileModel.expires_at < to_db(now)),
                        and_(
                            FileModel.max_downloads.isnot(None),
                            FileModel.download_count >= FileModel.max_downloads,
                        ),
                    )
                )
                .all()
            )
            return [_model_to_dto(m) for m in models]

    def sum_sizes(self) -> int:
        with self._get_session() as session:
            total = session.query(func.sum(FileModel.size_bytes)).scalar()
            return total or 0

    def count(self) -> int:
        with self._get_session() as session:
            return session.query(func.count(FileModel.id)).scalar() or 0
