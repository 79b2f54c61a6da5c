"""Users service — account administration and self-service."""

from auth import hash_password, verify_password
from errors import AuthenticationError, ForbiddenError, NotFoundError, ValidationError
from logging_config import get_logger
from api.auth.dto.auth import Identity
from api.auth.repositories.login_logs_repository import LoginLogsRepository
from api.auth.repositories.sessions_repository import SessionsRepository
from api.files.repositories.files_repository import FilesRepository
from api.users.dto.user import UserRecord, UserSummary
from api.users.repositories.users_repository import UsersRepository

logger = get_logger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 4


def validate_username(username: str) -> None:
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise ValidationError(
            f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters"
        )


def validate_password(password: str) -> None:
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValidationError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")


class UsersService:
    def __init__(
        self,
        users: UsersRepository,
        sessions: SessionsRepository,
        login_logs: LoginLogsRepository,
        files: FilesRepository,
    ):
        self.users = users
        self.sessions = sessions
        self.login_logs = login_logs
        self.files = files

    def list_users(self) -> list[UserSummary]:
        return [UserSummary.from_record(u) for u in self.users.list_all()]

    def create_user(self, username: str, password: str, is_admin: bool = False) -> UserRecord:
        if not username or not password:
            raise ValidationError("Username and password required")
        validate_username(username)
        validate_password(password)
        if self.users.username_taken(username):
            raise ValidationError("Username already exists")
        user = self.users.create(username, hash_password(password), is_admin)
        logger.info("Created user %s (admin=%s)", username, is_admin)
        return user

    def _get(self, user_id: str) -> UserRecord:
        user = self.users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def delete_user(self, actor: Identity, user_id: str) -> None:
        if user_id == actor.id:
            raise ForbiddenError("You cannot delete your own account")
        user = self._get(user_id)

        self.sessions.delete_for_user(user_id)
        self.login_logs.delete_for_user(user_id)
        # Files outlive their owner and stay visible to admins
        self.files.clear_owner(user_id)
        self.users.delete(user_id)
        logger.info("User %s deleted by %s", user.username, actor.username)

    def toggle_active(self, actor: Identity, user_id: str) -> bool:
        if user_id == actor.id:
            raise ForbiddenError("You cannot deactivate your own account")
        user = self._get(user_id)

        is_active = not user.is_active
        self.users.set_active(user_id, is_active)
        if not is_active:
            self.sessions.delete_for_user(user_id)
        return is_active

    def set_password(self, user_id: str, password: str) -> None:
        self._get(user_id)
        validate_password(password)
        self.users.update_password(user_id, hash_password(password))

    def get_account(self, identity: Identity) -> UserRecord:
        return self._get(identity.id)

    def update_account(
        self,
        identity: Identity,
        current_password: str | None = None,
        new_password: str | None = None,
        new_username: str | None = None,
    ) -> UserRecord:
        user = self._get(identity.id)

        if new_password:
            if not current_password:
                raise ValidationError("Current password required")
            if not verify_password(current_password, user.password_hash):
                raise AuthenticationError("Current password is incorrect")
            validate_password(new_password)
            self.users.update_password(user.id, hash_password(new_password))

        if new_username and new_username != user.username:
            validate_username(new_username)
            if self.users.username_taken(new_username, exclude_id=user.id):
                raise ValidationError("Username already taken")
            self.users.update_username(user.id, new_username)

        return self._get(user.id)
