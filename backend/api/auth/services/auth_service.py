"""Auth service — login, logout and sliding-expiry sessions."""

from datetime import datetime, timedelta

from auth import verify_password
from config import SESSION_DURATION_MINUTES
from database import utcnow
from errors import AuthenticationError, ForbiddenError, ValidationError
from logging_config import get_logger
from api.auth.dto.auth import Identity, LoginLogEntry, SessionRecord
from api.auth.repositories.login_logs_repository import LoginLogsRepository
from api.auth.repositories.sessions_repository import SessionsRepository
from api.users.dto.user import UserRecord
from api.users.repositories.users_repository import UsersRepository

logger = get_logger(__name__)


def to_identity(user: UserRecord) -> Identity:
    return Identity(id=user.id, username=user.username, is_admin=user.is_admin)


class AuthService:
    def __init__(
        self,
        users: UsersRepository,
        sessions: SessionsRepository,
        login_logs: LoginLogsRepository,
        session_duration: timedelta = timedelta(minutes=SESSION_DURATION_MINUTES),
    ):
        self.users = users
        self.sessions = sessions
        self.login_logs = login_logs
        self.session_duration = session_duration

    def login(
        self,
        username: str,
        password: str,
        ip_address: str | None = None,
        user_agent: str | None = None,
    ) -> tuple[SessionRecord, Identity]:
        if not username or not password:
            raise ValidationError("Username and password required")

        user = self.users.get_by_username(username)
        if not user or not verify_password(password, user.password_hash):
            self.login_logs.create(user.id if user else None, username, ip_address, user_agent, False)
            logger.warning("Failed login for %r from %s", username, ip_address)
            raise AuthenticationError("Invalid credentials")

        if not user.is_active:
            self.login_logs.create(user.id, username, ip_address, user_agent, False)
            raise ForbiddenError("Account disabled")

        self.login_logs.create(user.id, username, ip_address, user_agent, True)
        session = self.sessions.create(user.id, utcnow() + self.session_duration)
        return session, to_identity(user)

    def logout(self, session_id: str) -> None:
        self.sessions.delete(session_id)

    def validate_session(self, session_id: str, now: datetime | None = None) -> Identity | None:
        """Return the caller's identity and push the session expiry forward.

        Expired sessions and sessions of missing or disabled accounts are
        deleted and never extended.
        """
        now = now or utcnow()
        session = self.sessions.get(session_id)
        if not session:
            return None
        if session.expires_at < now:
            self.sessions.delete(session_id)
            return None

        user = self.users.get_by_id(session.user_id)
        if not user or not user.is_active:
            self.sessions.delete(session_id)
            return None

        self.sessions.refresh(session_id, now + self.session_duration)
        return to_identity(user)

    def recent_logins(self, limit: int = 100) -> list[LoginLogEntry]:
        return self.login_logs.latest(limit)
