"""Setup service — first-run configuration and instance settings."""

from config import DEFAULT_APP_NAME, DEFAULT_MAX_STORAGE
from errors import ValidationError
from logging_config import get_logger
from api.setup.dto.setup import SetupRequest, SetupStatus
from api.setup.repositories.config_repository import ConfigRepository
from api.users.services.users_service import UsersService

logger = get_logger(__name__)

APP_NAME_KEY = "app_name"
MAX_STORAGE_KEY = "max_storage"
SETUP_COMPLETE_KEY = "setup_complete"

DEFAULT_STORAGE_GB = 15
MIN_STORAGE_GB = 1
MAX_STORAGE_GB = 1000


class SetupService:
    def __init__(self, config: ConfigRepository, users: UsersService):
        self.config = config
        self.users = users

    def is_setup_complete(self) -> bool:
        return self.config.get(SETUP_COMPLETE_KEY) == "true"

    def get_app_name(self) -> str:
        return self.config.get(APP_NAME_KEY) or DEFAULT_APP_NAME

    def get_max_storage(self) -> int:
        value = self.config.get(MAX_STORAGE_KEY)
        try:
            return int(value) if value else DEFAULT_MAX_STORAGE
        except ValueError:
            logger.warning("Ignoring malformed max_storage value %r", value)
            return DEFAULT_MAX_STORAGE

    def status(self) -> SetupStatus:
        complete = self.is_setup_complete()
        return SetupStatus(
            setup_required=not complete,
            app_name=self.get_app_name() if complete else None,
        )

    def run_setup(self, data: SetupRequest) -> None:
        if self.is_setup_complete():
            raise ValidationError("Setup already completed")

        if len(data.app_name) < 2:
            raise ValidationError("Application name required")
        storage_gb = data.max_storage_gb or DEFAULT_STORAGE_GB
        if not MIN_STORAGE_GB <= storage_gb <= MAX_STORAGE_GB:
            raise ValidationError(
                f"Storage must be between {MIN_STORAGE_GB} and {MAX_STORAGE_GB} GB"
            )

        self.users.create_user(data.admin_username, data.admin_password, is_admin=True)
        self.config.set_many({
            APP_NAME_KEY: data.app_name,
            MAX_STORAGE_KEY: str(storage_gb * 1024**3),
            SETUP_COMPLETE_KEY: "true",
        })
        logger.info("Setup completed for %s", data.app_name)
