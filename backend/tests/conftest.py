import os
import sys
import uuid
from pathlib import Path

# Keep password hashing cheap in tests; must be set before config is imported
os.environ.setdefault("DROP_PASSWORD_ITERATIONS", "1000")

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from httpx import AsyncClient

from database import Database
from main import create_app
from storage import ArtifactStore
from api.auth.repositories.login_logs_repository import LoginLogsRepository
from api.auth.repositories.sessions_repository import SessionsRepository
from api.files.repositories.files_repository import FilesRepository
from api.setup.repositories.config_repository import ConfigRepository
from api.users.repositories.users_repository import UsersRepository
from api.users.services.users_service import UsersService

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass"
USER_USERNAME = "alice"
USER_PASSWORD = "alice-pass"


@pytest.fixture(scope="function")
def db(tmp_path):
    database = Database(f"sqlite:///{tmp_path / 'test.db'}")
    database.init_db()
    yield database
    database.dispose()


@pytest.fixture(scope="function")
def artifacts(tmp_path) -> ArtifactStore:
    return ArtifactStore(tmp_path / "uploads")


@pytest.fixture
def files_repository(db) -> FilesRepository:
    return FilesRepository(db)


@pytest.fixture
def users_repository(db) -> UsersRepository:
    return UsersRepository(db)


@pytest.fixture
def sessions_repository(db) -> SessionsRepository:
    return SessionsRepository(db)


@pytest.fixture
def login_logs_repository(db) -> LoginLogsRepository:
    return LoginLogsRepository(db)


@pytest.fixture
def config_repository(db) -> ConfigRepository:
    return ConfigRepository(db)


@pytest.fixture
def users_service(
    users_repository, sessions_repository, login_logs_repository, files_repository
) -> UsersService:
    return UsersService(
        users_repository, sessions_repository, login_logs_repository, files_repository
    )


@pytest.fixture
def make_file(files_repository, artifacts):
    """Insert a record and, unless ``write=False``, its artifact."""

    def _make(
        size: int = 10,
        name: str = "report.txt",
        password: str | None = None,
        expires_at=None,
        max_downloads: int | None = None,
        owner_user_id: str | None = None,
        write: bool = True,
    ):
        file_id = uuid.uuid4().hex[:10]
        storage_key = f"{file_id}-{name}"
        if write:
            artifacts.write(storage_key, b"x" * size)
        return files_repository.insert(
            id=file_id,
            storage_key=storage_key,
            original_name=name,
            size_bytes=size,
            mime_type="text/plain",
            password=password,
            expires_at=expires_at,
            max_downloads=max_downloads,
            owner_user_id=owner_user_id,
        )

    return _make


@pytest.fixture(scope="function")
def app(tmp_path):
    application = create_app(
        database_url=f"sqlite:///{tmp_path / 'app.db'}",
        files_dir=tmp_path / "app_uploads",
    )
    yield application
    application.state.db.dispose()


@pytest.fixture
def admin(app):
    return app.state.users_service.create_user(ADMIN_USERNAME, ADMIN_PASSWORD, is_admin=True)


@pytest.fixture
def user(app):
    return app.state.users_service.create_user(USER_USERNAME, USER_PASSWORD)


async def login(client: AsyncClient, username: str, password: str) -> httpx.Response:
    response = await client.post(
        "/api/auth/login", json={"username": username, "password": password}
    )
    assert response.status_code == 200, response.text
    return response


@pytest_asyncio.fixture(scope="function")
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest_asyncio.fixture(scope="function")
async def admin_client(app, admin) -> AsyncGenerator[AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        await login(client, ADMIN_USERNAME, ADMIN_PASSWORD)
        yield client


@pytest_asyncio.fixture(scope="function")
async def user_client(app, user) -> AsyncGenerator[AsyncClient, None]:
    transport = httpx.ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        await login(client, USER_USERNAME, USER_PASSWORD)
        yield client
