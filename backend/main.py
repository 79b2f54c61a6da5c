"""Dropshare — Main application entry point."""

from contextlib import asynccontextmanager
from datetime import timedelta
from pathlib import Path

from alembic import command
from alembic.config import Config
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cleanup import ExpirySweeper
from config import (
    DATABASE_URL,
    DB_ECHO,
    FILES_DIR,
    MAX_FILE_SIZE,
    PURGE_CONFIRMATION,
    SESSION_DURATION_MINUTES,
)
from database import Database
from errors import DropError
from logging_config import get_logger
from storage import ArtifactStore
from api.account.controllers.account_controller import router as account_router
from api.auth.controllers.auth_controller import logs_router as login_logs_router
from api.auth.controllers.auth_controller import router as auth_router
from api.auth.repositories.login_logs_repository import LoginLogsRepository
from api.auth.repositories.sessions_repository import SessionsRepository
from api.auth.services.auth_service import AuthService
from api.files.controllers.files_controller import cleanup_router
from api.files.controllers.files_controller import router as files_router
from api.files.repositories.files_repository import FilesRepository
from api.files.services.files_service import FilesService
from api.setup.controllers.setup_controller import router as setup_router
from api.setup.repositories.config_repository import ConfigRepository
from api.setup.services.setup_service import SetupService
from api.share.controllers.share_controller import router as share_router
from api.share.services.share_service import ShareService
from api.stats.controllers.stats_controller import router as stats_router
from api.stats.services.stats_service import QuotaAccountant, StatsService
from api.upload.controllers.upload_controller import router as upload_router
from api.upload.services.upload_service import UploadService
from api.users.controllers.users_controller import router as users_router
from api.users.repositories.users_repository import UsersRepository
from api.users.services.users_service import UsersService

BASE_DIR = Path(__file__).parent

logger = get_logger(__name__)


def run_migrations(database_url: str) -> bool:
    """Run Alembic migrations on startup."""
    try:
        alembic_cfg = Config(str(BASE_DIR / "alembic.ini"))
        alembic_cfg.set_main_option("script_location", str(BASE_DIR / "db_migrations"))
        alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
        alembic_cfg.attributes["configure_logger"] = False
        command.upgrade(alembic_cfg, "head")
    except Exception:
        logger.exception("Migration failed, creating tables directly")
        return False
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    app.state.db.dispose()


async def drop_error_handler(request: Request, exc: DropError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.code},
    )


def create_app(
    database_url: str = DATABASE_URL,
    files_dir: Path = FILES_DIR,
    session_minutes: int = SESSION_DURATION_MINUTES,
    max_file_size: int = MAX_FILE_SIZE,
    purge_confirmation: str = PURGE_CONFIRMATION,
) -> FastAPI:
    """Build the application and every collaborator it owns."""
    db = Database(database_url, echo=DB_ECHO)
    if not run_migrations(database_url):
        db.init_db()

    artifacts = ArtifactStore(files_dir)
    files_repository = FilesRepository(db)
    users_repository = UsersRepository(db)
    sessions_repository = SessionsRepository(db)
    login_logs_repository = LoginLogsRepository(db)
    config_repository = ConfigRepository(db)

    users_service = UsersService(
        users_repository, sessions_repository, login_logs_repository, files_repository
    )
    setup_service = SetupService(config_repository, users_service)

    app = FastAPI(title="Dropshare", version="0.1.0", lifespan=lifespan)
    app.state.db = db
    app.state.artifacts = artifacts
    app.state.auth_service = AuthService(
        users_repository,
        sessions_repository,
        login_logs_repository,
        session_duration=timedelta(minutes=session_minutes),
    )
    app.state.files_service = FilesService(files_repository, artifacts, purge_confirmation)
    app.state.share_service = ShareService(files_repository, artifacts)
    app.state.upload_service = UploadService(files_repository, artifacts, max_file_size)
    app.state.sweeper = ExpirySweeper(files_repository, artifacts, sessions_repository)
    app.state.users_service = users_service
    app.state.setup_service = setup_service
    app.state.stats_service = StatsService(
        QuotaAccountant(files_repository, setup_service),
        files_repository,
        users_repository,
        artifacts.root,
    )

    app.add_exception_handler(DropError, drop_error_handler)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    app.include_router(setup_router)
    app.include_router(auth_router)
    app.include_router(login_logs_router)
    app.include_router(account_router)
    app.include_router(users_router)
    app.include_router(upload_router)
    app.include_router(files_router)
    app.include_router(cleanup_router)
    app.include_router(share_router)
    app.include_router(stats_router)

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
