"""Account Data Transfer Objects."""

from datetime import datetime

from pydantic import BaseModel

from api.dto import CamelModel


class AccountInfo(CamelModel):
    id: str
    username: str
    is_admin: bool
    created_at: datetime


class AccountResponse(BaseModel):
    success: bool = True
    user: AccountInfo


class AccountUpdate(CamelModel):
    current_password: str | None = None
    new_password: str | None = None
    new_username: str | None = None
