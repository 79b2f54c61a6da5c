"""Central ORM module — imports all models for Alembic metadata discovery."""

from api.auth.orm.login_log_model import LoginLogModel
from api.auth.orm.session_model import SessionModel
from api.files.orm.file_model import FileModel
from api.setup.orm.config_model import ConfigModel
from api.users.orm.user_model import UserModel

__all__ = [
    "ConfigModel",
    "FileModel",
    "LoginLogModel",
    "SessionModel",
    "UserModel",
]
