import pytest
from httpx import AsyncClient, ASGITransport

from url_registry.main import app as fastapi_app
from url_registry.db.connection import get_db_async


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/", "/api", "/api/unknown/1/2", "/does-not-exist"])
async def test_unknown_route(client: AsyncClient, path):
    response = await client.get(path)
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Endpoint not found"}

@pytest.mark.asyncio
async def test_unsupported_method(client: AsyncClient):
    response = await client.patch("/api/urls/some-id", json={"name": "x"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Endpoint not found"}

@pytest.mark.asyncio
async def test_malformed_json_body(client: AsyncClient):
    response = await client.post(
        "/api/urls", content=b"{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 422
    assert response.json()["success"] is False

@pytest.mark.asyncio
async def test_unhandled_exception_returns_500():
    async def exploding_session():
        raise RuntimeError("boom")
        yield

    fastapi_app.dependency_overrides[get_db_async] = exploding_session
    try:
        # The server error middleware re-raises after responding
        transport = ASGITransport(app=fastapi_app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            response = await c.get("/api/urls")
    finally:
        fastapi_app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "Internal server error"}


# --- Store failures are reported in-band, never raised ---

@pytest.mark.asyncio
async def test_list_store_failure(broken_client: AsyncClient, broken_session):
    response = await broken_client.get("/api/urls")
    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Failed to fetch URLs"}
    assert broken_session.rollbacks >= 1

@pytest.mark.asyncio
async def test_get_store_failure(broken_client: AsyncClient):
    response = await broken_client.get("/api/urls/abc")
    assert response.json() == {"success": False, "error": "Failed to fetch URL"}

@pytest.mark.asyncio
async def test_create_store_failure(broken_client: AsyncClient):
    response = await broken_client.post("/api/urls", json={"name": "A", "mainUrl": "https://a.example"})
    assert response.json() == {"success": False, "error": "Failed to create URL"}

@pytest.mark.asyncio
async def test_create_validation_runs_before_store(broken_client: AsyncClient, broken_session):
    response = await broken_client.post("/api/urls", json={"name": "A"})
    assert response.json() == {"success": False, "error": "Name and mainUrl are required"}
    assert broken_session.rollbacks == 0

@pytest.mark.asyncio
async def test_update_store_failure(broken_client: AsyncClient):
    response = await broken_client.put("/api/urls/abc", json={"name": "A", "mainUrl": "https://a.example"})
    assert response.json() == {"success": False, "error": "Failed to update URL"}

@pytest.mark.asyncio
async def test_delete_store_failure(broken_client: AsyncClient):
    response = await broken_client.delete("/api/urls/abc")
    assert response.json() == {"success": False, "error": "Failed to delete URL"}
