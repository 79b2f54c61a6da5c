"""Config repository — instance-wide key/value settings."""

from database import Database
from api.setup.orm.config_model import ConfigModel


class ConfigRepository:
    def __init__(self, db: Database):
        self._db = db

    def _get_session(self):
        return self._db.session()

    def get_all(self) -> dict[str, str]:
        with self._get_session() as session:
            rows = session.query(ConfigModel).all()
            return {r.key: r.value for r in rows}

    def get(self, key: str) -> str | None:
        with self._get_session() as session:
            row = session.query(ConfigModel).filter_by(key=key).first()
            return row.value if row else None

    def set_many(self, data: dict[str, str]) -> None:
        with self._get_session() as session:
            for key, value in data.items():
                row = session.query(ConfigModel).filter_by(key=key).first()
                if row:
                    row.value = value
                else:
                    session.add(ConfigModel(key=key, value=value))
            session.commit()
