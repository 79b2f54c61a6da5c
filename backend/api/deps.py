"""Dependencies — hand the services built in ``create_app`` to the routes."""

from fastapi import Request

from cleanup import ExpirySweeper
from api.auth.services.auth_service import AuthService
from api.files.services.files_service import FilesService
from api.setup.services.setup_service import SetupService
from api.share.services.share_service import ShareService
from api.stats.services.stats_service import StatsService
from api.upload.services.upload_service import UploadService
from api.users.services.users_service import UsersService


def get_auth_service(request: Request) -> AuthService:
    return request.app.state.auth_service


def get_files_service(request: Request) -> FilesService:
    return request.app.state.files_service


def get_share_service(request: Request) -> ShareService:
    return request.app.state.share_service


def get_upload_service(request: Request) -> UploadService:
    return request.app.state.upload_service


def get_sweeper(request: Request) -> ExpirySweeper:
    return request.app.state.sweeper


def get_stats_service(request: Request) -> StatsService:
    return request.app.state.stats_service


def get_users_service(request: Request) -> UsersService:
    return request.app.state.users_service


def get_setup_service(request: Request) -> SetupService:
    return request.app.state.setup_service
