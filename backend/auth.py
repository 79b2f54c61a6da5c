"""Authentication — password hashing and session-cookie identity."""

import hashlib
import hmac
import secrets

from fastapi import Request

from config import COOKIE_NAME, PASSWORD_HASH_ITERATIONS
from errors import AuthenticationError, ForbiddenError
from api.auth.dto.auth import Identity

HASH_ALGORITHM = "pbkdf2_sha512"


def _derive(password: str, salt: str, iterations: int) -> str:
    return hashlib.pbkdf2_hmac(
        "sha512", password.encode(), salt.encode(), iterations
    ).hex()


def hash_password(password: str, iterations: int = PASSWORD_HASH_ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    return f"{HASH_ALGORITHM}${iterations}${salt}${_derive(password, salt, iterations)}"


def verify_password(password: str, stored_hash: str) -> bool:
    try:
        algorithm, iterations, salt, digest = stored_hash.split("$")
        rounds = int(iterations)
    except ValueError:
        return False
    if algorithm != HASH_ALGORITHM:
        return False
    return hmac.compare_digest(_derive(password, salt, rounds), digest)


def get_identity(request: Request) -> Identity | None:
    """Resolve the session cookie. A valid session is extended as a side effect."""
    session_id = request.cookies.get(COOKIE_NAME)
    if not session_id:
        return None
    return request.app.state.auth_service.validate_session(session_id)


def require_user(request: Request) -> Identity:
    identity = get_identity(request)
    if identity is None:
        raise AuthenticationError()
    return identity


def require_admin(request: Request) -> Identity:
    identity = require_user(request)
    if not identity.is_admin:
        raise ForbiddenError()
    return identity
