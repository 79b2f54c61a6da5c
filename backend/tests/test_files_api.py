import io

import pytest
from httpx import AsyncClient


async def _upload(client: AsyncClient, content: bytes = b"payload", name: str = "data.csv", **form):
    files = {"file": (name, io.BytesIO(content), "text/csv")}
    response = await client.post("/api/upload", files=files, data=form)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_list_requires_login(async_client: AsyncClient):
    response = await async_client.get("/api/files")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_users_see_own_files_admins_see_all(admin_client: AsyncClient, user_client: AsyncClient):
    mine = await _upload(user_client, password="pw")
    await _upload(admin_client)

    user_files = (await user_client.get("/api/files")).json()["files"]
    admin_files = (await admin_client.get("/api/files")).json()["files"]

    assert [f["id"] for f in user_files] == [mine["id"]]
    assert len(admin_files) == 2
    assert user_files[0]["hasPassword"] is True
    assert user_files[0]["name"] == mine["filename"]
    assert "password" not in user_files[0]


@pytest.mark.asyncio
async def test_owner_download_counts(user_client: AsyncClient, app):
    uploaded = await _upload(user_client, b"a,b\n1,2\n")

    response = await user_client.get(f"/api/files/{uploaded['filename']}")

    assert response.status_code == 200
    assert response.content == b"a,b\n1,2\n"
    assert app.state.files_service.repository.get_by_id(uploaded["id"]).download_count == 1


@pytest.mark.asyncio
async def test_owner_download_heals_missing_artifact(user_client: AsyncClient, app):
    uploaded = await _upload(user_client)
    app.state.artifacts.delete(uploaded["filename"])

    response = await user_client.get(f"/api/files/{uploaded['filename']}")

    assert response.status_code == 404
    assert app.state.files_service.repository.get_by_id(uploaded["id"]) is None


@pytest.mark.asyncio
async def test_other_users_file_looks_missing(admin_client: AsyncClient, user_client: AsyncClient, app):
    theirs = await _upload(admin_client)
    url = f"/api/files/{theirs['filename']}"

    assert (await user_client.get(url)).status_code == 404
    response = await user_client.delete(url)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"
    assert app.state.artifacts.exists(theirs["filename"])


@pytest.mark.asyncio
async def test_delete_removes_artifact_and_record(user_client: AsyncClient, app):
    uploaded = await _upload(user_client)

    response = await user_client.delete(f"/api/files/{uploaded['filename']}")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert not app.state.artifacts.exists(uploaded["filename"])
    assert app.state.files_service.repository.get_by_id(uploaded["id"]) is None


@pytest.mark.asyncio
async def test_admin_can_delete_any_file(admin_client: AsyncClient, user_client: AsyncClient):
    uploaded = await _upload(user_client)
    response = await admin_client.delete(f"/api/files/{uploaded['filename']}")
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_purge_is_admin_only(user_client: AsyncClient):
    response = await user_client.post("/api/files/purge", json={"confirmCode": "SUPPRIMER-TOUT"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_purge_needs_exact_code(admin_client: AsyncClient, app):
    await _upload(admin_client)
    await _upload(admin_client)

    wrong = await admin_client.post("/api/files/purge", json={"confirmCode": "supprimer-tout"})
    assert wrong.status_code == 400
    assert wrong.json() == {"detail": "Incorrect confirmation code", "code": "VALIDATION"}
    assert app.state.files_service.repository.count() == 2

    response = await admin_client.post("/api/files/purge", json={"confirmCode": "SUPPRIMER-TOUT"})
    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "deletedCount": 2,
        "errorCount": 0,
        "message": "2 file(s) deleted",
    }
    assert list(app.state.artifacts.root.iterdir()) == []


@pytest.mark.asyncio
async def test_cleanup_with_nothing_to_do(async_client: AsyncClient):
    for method in ("GET", "POST"):
        response = await async_client.request(method, "/api/cleanup")
        assert response.status_code == 200
        assert response.json() == {"success": True, "deleted": 0, "files": []}


@pytest.mark.asyncio
async def test_health(async_client: AsyncClient):
    response = await async_client.get("/api/health")
    assert response.json() == {"status": "ok"}
