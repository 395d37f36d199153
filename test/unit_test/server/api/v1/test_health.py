from unittest.mock import AsyncMock

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from lockin import __version__
from lockin.core.database.session import get_session
from lockin.server.main import app


class TestHealth:
    async def test_health_check(self, client: AsyncClient):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "database": "ok"}

    async def test_unreachable_database_reports_503(self, client: AsyncClient):
        broken = AsyncMock()
        broken.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))

        async def broken_session():
            yield broken

        app.dependency_overrides[get_session] = broken_session

        response = await client.get("/health")

        assert response.status_code == 503
        assert response.json() == {"status": "unavailable", "database": "unreachable"}

    async def test_version(self, client: AsyncClient):
        response = await client.get("/version")

        assert response.status_code == 200
        assert response.json() == {"version": __version__, "schema_version": "v1"}

    async def test_openapi_served_under_api_prefix(self, client: AsyncClient):
        response = await client.get("/api/v1/openapi.json")

        assert response.status_code == 200
        assert response.json()["info"]["title"] == "Lock In"

    async def test_process_time_header(self, client: AsyncClient):
        response = await client.get("/version")

        assert float(response.headers["X-Process-Time"]) >= 0
