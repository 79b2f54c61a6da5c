"""Sessions repository — data access layer."""

import uuid
from datetime import datetime

from database import Database, from_db, to_db, utcnow
from api.auth.dto.auth import SessionRecord
from api.auth.orm.session_model import SessionModel


def _model_to_dto(model: SessionModel) -> SessionRecord:
    return SessionRecord(
        id=model.id,
        user_id=model.user_id,
        expires_at=from_db(model.expires_at),
        created_at=from_db(model.created_at),
    )


class SessionsRepository:
    def __init__(self, db: Database):
        self._db = db

    def _get_session(self):
        return self._db.session()

    def create(self, user_id: str, expires_at: datetime) -> SessionRecord:
        with self._get_session() as session:
            model = SessionModel(
                id=str(uuid.uuid4()),
                user_id=user_id,
                expires_at=to_db(expires_at),
                created_at=to_db(utcnow()),
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return _model_to_dto(model)

    def get(self, session_id: str) -> SessionRecord | None:
        with self._get_session() as session:
            model = session.query(SessionModel).filter_by(id=session_id).first()
            return _model_to_dto(model) if model else None

    def refresh(self, session_id: str, expires_at: datetime) -> None:
        with self._get_session() as session:
            session.query(SessionModel).filter_by(id=session_id).update(
                {SessionModel.expires_at: to_db(expires_at)}
            )
            session.commit()

    def delete(self, session_id: str) -> None:
        with self._get_session() as session:
            session.query(SessionModel).filter_by(id=session_id).delete()
            session.commit()

    def delete_for_user(self, user_id: str) -> int:
        with self._get_session() as session:
            deleted = session.query(SessionModel).filter_by(user_id=user_id).delete()
            session.commit()
            return deleted

    def delete_expired(self, now: datetime) -> int:
        with self._get_session() as session:
            deleted = (
                session.query(SessionModel)
                .filter(SessionModel.expires_at < to_db(now))
                .delete(synchronize_session=False)
            )
            session.commit()
            return deleted
