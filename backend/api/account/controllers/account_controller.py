"""Account controller — the signed-in user's own profile."""

from fastapi import APIRouter, Depends

from auth import require_user
from api.account.dto.account import AccountInfo, AccountResponse, AccountUpdate
from api.auth.dto.auth import Identity
from api.deps import get_users_service
from api.users.dto.user import UserRecord
from api.users.services.users_service import UsersService

router = APIRouter(prefix="/api/account", tags=["Account"])


def _account(user: UserRecord) -> AccountResponse:
    return AccountResponse(user=AccountInfo(
        id=user.id,
        username=user.username,
        is_admin=user.is_admin,
        created_at=user.created_at,
    ))


@router.get("", response_model=AccountResponse)
def get_account(
    identity: Identity = Depends(require_user),
    service: UsersService = Depends(get_users_service),
):
    return _account(service.get_account(identity))


@router.patch("", response_model=AccountResponse)
def update_account(
    data: AccountUpdate,
    identity: Identity = Depends(require_user),
    service: UsersService = Depends(get_users_service),
):
    user = service.update_account(
        identity,
        current_password=data.current_password,
        new_password=data.new_password,
        new_username=data.new_username,
    )
    return _account(user)
