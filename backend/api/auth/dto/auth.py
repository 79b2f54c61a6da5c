"""Auth Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel

from api.dto import CamelModel


class Identity(CamelModel):
    """Who is calling, as resolved from the session cookie."""

    id: str
    username: str
    is_admin: bool


class SessionRecord(BaseModel):
    id: str
    user_id: str
    expires_at: datetime
    created_at: datetime


class LoginRequest(BaseModel):
    username: str = ""
    password: str = ""


class LoginResponse(BaseModel):
    success: bool = True
    user: Identity


class MeResponse(BaseModel):
    user: Identity | None = None


class LoginLogEntry(CamelModel):
    id: str
    user_id: str | None = None
    username: str
    ip_address: str | None = None
    user_agent: str | None = None
    success: bool
    created_at: datetime


class LoginLogsResponse(BaseModel):
    logs: list[LoginLogEntry]
