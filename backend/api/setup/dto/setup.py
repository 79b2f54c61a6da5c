"""Setup Data Transfer Objects."""

from pydantic import BaseModel

from api.dto import CamelModel


class SetupStatus(CamelModel):
    setup_required: bool
    app_name: str | None = None


class SetupRequest(CamelModel):
    app_name: str = ""
    admin_username: str = ""
    admin_password: str = ""
    max_storage_gb: int | None = None


class SetupResponse(BaseModel):
    success: bool = True
