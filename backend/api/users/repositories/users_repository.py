"""Users repository — data access layer."""

import uuid

from sqlalchemy import func

from database import Database, from_db, to_db, utcnow
from api.users.dto.user import UserRecord
from api.users.orm.user_model import UserModel


def _model_to_dto(model: UserModel) -> UserRecord:
    return UserRecord(
        id=model.id,
        username=model.username,
        password_hash=model.password_hash,
        is_admin=bool(model.is_admin),
        is_active=bool(model.is_active),
        created_at=from_db(model.created_at),
        updated_at=from_db(model.updated_at),
    )


class UsersRepository:
    def __init__(self, db: Database):
        self._db = db

    def _get_session(self):
        return self._db.session()

    def get_by_id(self, user_id: str) -> UserRecord | None:
        with self._get_session() as session:
            model = session.query(UserModel).filter_by(id=user_id).first()
            return _model_to_dto(model) if model else None

    def get_by_username(self, username: str) -> UserRecord | None:
        with self._get_session() as session:
            model = session.query(UserModel).filter_by(username=username).first()
            return _model_to_dto(model) if model else None

    def username_taken(self, username: str, exclude_id: str | None = None) -> bool:
        with self._get_session() as session:
            query = session.query(UserModel.id).filter(UserModel.username == username)
            if exclude_id:
                query = query.filter(UserModel.id != exclude_id)
            return query.first() is not None

    def list_all(self) -> list[UserRecord]:
        with self._get_session() as session:
            models = session.query(UserModel).order_by(UserModel.created_at.desc()).all()
            return [_model_to_dto(m) for m in models]

    def count(self) -> int:
        with self._get_session() as session:
            return session.query(func.count(UserModel.id)).scalar() or 0

    def create(self, username: str, password_hash: str, is_admin: bool = False) -> UserRecord:
        now = to_db(utcnow())
        with self._get_session() as session:
            model = UserModel(
                id=str(uuid.uuid4()),
                username=username,
                password_hash=password_hash,
                is_admin=is_admin,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            session.add(model)
            session.commit()
            session.refresh(model)
            return _model_to_dto(model)

    def _update(self, user_id: str, **values) -> bool:
        values["updated_at"] = to_db(utcnow())
        with self._get_session() as session:
            updated = session.query(UserModel).filter_by(id=user_id).update(values)
            session.commit()
            return updated > 0

    def update_password(self, user_id: str, password_hash: str) -> bool:
        return self._update(user_id, password_hash=password_hash)

    def update_username(self, user_id: str, username: str) -> bool:
        return self._update(user_id, username=username)

    def set_active(self, user_id: str, is_active: bool) -> bool:
        return self._update(user_id, is_active=is_active)

    def delete(self, user_id: str) -> bool:
        with self._get_session() as session:
            deleted = session.query(UserModel).filter_by(id=user_id).delete()
            session.commit()
            return deleted > 0
