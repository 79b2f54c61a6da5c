import pytest
from httpx import AsyncClient

SETUP = {
    "appName": "Team Drop",
    "adminUsername": "root",
    "adminPassword": "rootpass",
    "maxStorageGb": 2,
}


@pytest.mark.asyncio
async def test_fresh_instance_requires_setup(async_client: AsyncClient):
    response = await async_client.get("/api/setup")
    assert response.json() == {"setupRequired": True, "appName": None}


@pytest.mark.asyncio
async def test_setup_runs_once(async_client: AsyncClient, app):
    response = await async_client.post("/api/setup", json=SETUP)
    assert response.status_code == 200
    assert response.json() == {"success": True}

    status = (await async_client.get("/api/setup")).json()
    assert status == {"setupRequired": False, "appName": "Team Drop"}
    assert app.state.setup_service.get_max_storage() == 2 * 1024**3

    again = await async_client.post("/api/setup", json={**SETUP, "adminUsername": "other"})
    assert again.status_code == 400
    assert app.state.users_service.users.count() == 1


@pytest.mark.asyncio
async def test_setup_admin_can_login(async_client: AsyncClient):
    await async_client.post("/api/setup", json=SETUP)

    response = await async_client.post(
        "/api/auth/login", json={"username": "root", "password": "rootpass"}
    )
    assert response.status_code == 200
    assert response.json()["user"]["isAdmin"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "override",
    [
        {"appName": "X"},
        {"maxStorageGb": -1},
        {"maxStorageGb": 1001},
        {"adminUsername": "ab"},
        {"adminPassword": "123"},
    ],
)
async def test_setup_validation(async_client: AsyncClient, app, override):
    response = await async_client.post("/api/setup", json={**SETUP, **override})

    assert response.status_code == 400
    assert not app.state.setup_service.is_setup_complete()
    assert app.state.users_service.users.count() == 0


@pytest.mark.asyncio
async def test_setup_default_storage(async_client: AsyncClient, app):
    payload = {k: v for k, v in SETUP.items() if k != "maxStorageGb"}
    assert (await async_client.post("/api/setup", json=payload)).status_code == 200
    assert app.state.setup_service.get_max_storage() == 15 * 1024**3
