"""User Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel

from api.dto import CamelModel


class UserRecord(BaseModel):
    id: str
    username: str
    password_hash: str
    is_admin: bool
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserSummary(CamelModel):
    id: str
    username: str
    is_admin: bool
    is_active: bool
    created_at: datetime

    @classmethod
    def from_record(cls, record: UserRecord) -> "UserSummary":
        return cls(
            id=record.id,
            username=record.username,
            is_admin=record.is_admin,
            is_active=record.is_active,
            created_at=record.created_at,
        )


class UserListResponse(BaseModel):
    users: list[UserSummary]


class UserCreate(CamelModel):
    username: str = ""
    password: str = ""
    is_admin: bool = False


class UserCreateResponse(BaseModel):
    success: bool = True
    user: UserSummary


class UserUpdate(CamelModel):
    password: str | None = None
    toggle_active: bool = False


class UserUpdateResponse(CamelModel):
    success: bool = True
    is_active: bool | None = None


class SuccessResponse(BaseModel):
    success: bool = True
