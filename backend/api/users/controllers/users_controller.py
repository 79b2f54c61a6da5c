"""Users controller — admin-only account management."""

from fastapi import APIRouter, Depends

from auth import require_admin
from api.auth.dto.auth import Identity
from api.deps import get_users_service
from api.users.dto.user import (
    SuccessResponse,
    UserCreate,
    UserCreateResponse,
    UserListResponse,
    UserSummary,
    UserUpdate,
    UserUpdateResponse,
)
from api.users.services.users_service import UsersService

router = APIRouter(prefix="/api/users", tags=["Users"])


@router.get("", response_model=UserListResponse)
def list_users(
    _: Identity = Depends(require_admin),
    service: UsersService = Depends(get_users_service),
):
    return UserListResponse(users=service.list_users())


@router.post("", response_model=UserCreateResponse)
def create_user(
    data: UserCreate,
    _: Identity = Depends(require_admin),
    service: UsersService = Depends(get_users_service),
):
    user = service.create_user(data.username, data.password, data.is_admin)
    return UserCreateResponse(user=UserSummary.from_record(user))


@router.delete("/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    admin: Identity = Depends(require_admin),
    service: UsersService = Depends(get_users_service),
):
    service.delete_user(admin, user_id)
    return SuccessResponse()


@router.patch("/{user_id}", response_model=UserUpdateResponse)
def update_user(
    user_id: str,
    data: UserUpdate,
    admin: Identity = Depends(require_admin),
    service: UsersService = Depends(get_users_service),
):
    if data.toggle_active:
        return UserUpdateResponse(is_active=service.toggle_active(admin, user_id))
    if data.password:
        service.set_password(user_id, data.password)
    return UserUpdateResponse()
