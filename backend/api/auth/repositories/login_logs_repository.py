"""Login logs repository — append-only record of login attempts."""

import uuid

from database import Database, from_db, to_db, utcnow
from api.auth.dto.auth import LoginLogEntry
from api.auth.orm.login_log_model import LoginLogModel


def _model_to_dto(model: LoginLogModel) -> LoginLogEntry:
    return LoginLogEntry(
        id=model.id,
        user_id=model.user_id,
        username=model.username,
        ip_address=model.ip_address,
        user_agent=model.user_agent,
        success=bool(model.success),
        created_at=from_db(model.created_at),
    )


class LoginLogsRepository:
    def __init__(self, db: Database):
        self._db = db

    def _get_session(self):
        return self._db.session()

    def create(
        self,
        user_id: str | None,
        username: str,
        ip_address: str | None,
        user_agent: str | None,
        success: bool,
    ) -> None:
        with self._get_session() as session:
            session.add(LoginLogModel(
                id=str(uuid.uuid4()),
                user_id=user_id,
                username=username,
                ip_address=ip_address,
                user_agent=user_agent,
                success=success,
                created_at=to_db(utcnow()),
            ))
            session.commit()

    def latest(self, limit: int = 50) -> list[LoginLogEntry]:
        with self._get_session() as session:
            models = (
                session.query(LoginLogModel)
                .order_by(LoginLogModel.created_at.desc())
                .limit(limit)
                .all()
            )
            return [_model_to_dto(m) for m in models]

    def delete_for_user(self, user_id: str) -> int:
        with self._get_session() as session:
            deleted = session.query(LoginLogModel).filter_by(user_id=user_id).delete()
            session.commit()
            return deleted
