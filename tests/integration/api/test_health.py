import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_custom_health(client: AsyncClient):
    response = await client.get("/custom-health")

    assert response.status_code == 200
    assert response.json() == {"status": "UP", "details": {"database": "DB is reachable"}}
