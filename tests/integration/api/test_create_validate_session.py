"""
Integration tests for session creation and validation
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient

from src.domain.entities import SessionStatus
from tests.utils.json_compare import exclude_keys

BASE = "/api/session"


@pytest.mark.asyncio
async def test_create_session(client: AsyncClient, payloads, clock):
    """Test session is issued with a 64 hex char token"""
    response = await client.post(f"{BASE}/create-session", json=payloads.get("create_alice"))

    assert response.status_code == 201
    data = response.json()
    assert len(data["session_token"]) == 64
    int(data["session_token"], 16)
    assert data["created_date"] == clock.now.isoformat()
    assert data["expires_at"] == (clock.now + timedelta(minutes=60)).isoformat()
    assert exclude_keys(data, {"session_id", "session_token", "created_date", "expires_at"}) == {
        "user_id": 7,
        "user_name": "alice",
        "roles": ["USER", "REPORTER"],
    }


@pytest.mark.asyncio
async def test_create_session_missing_user_name(client: AsyncClient, payloads):
    """Test missing user_name is a 400, not a 422"""
    payload = payloads.get("create_alice")
    del payload["user_name"]

    response = await client.post(f"{BASE}/create-session", json=payload)

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYLOAD"


@pytest.mark.asyncio
async def test_create_session_wrong_type_is_invalid_payload(client: AsyncClient, payloads):
    response = await client.post(
        f"{BASE}/create-session", json=payloads.get("create_alice", ttl_minutes="soon")
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "INVALID_PAYLOAD"
    assert "body.ttl_minutes" in error["details"]["fields"]


@pytest.mark.asyncio
async def test_second_login_revokes_first_session(client: AsyncClient, payloads, fetch_session):
    """Test single-active-session: create twice, only the second token is valid"""
    first = (
        await client.post(f"{BASE}/create-session", json=payloads.get("create_alice", ttl_minutes=60))
    ).json()
    second = (
        await client.post(f"{BASE}/create-session", json=payloads.get("create_alice", ttl_minutes=30))
    ).json()

    assert first["session_token"] != second["session_token"]

    response = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": first["session_token"]}
    )
    assert response.status_code == 401
    assert response.json() == {"valid": False, "reason": "INVALID_OR_REVOKED"}

    response = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": second["session_token"]}
    )
    assert response.status_code == 200
    assert response.json()["valid"] is True

    revoked = await fetch_session(first["session_id"])
    assert revoked.status == SessionStatus.revoked
    assert revoked.active_flag is False
    assert revoked.revoked_by == "SYSTEM"
    assert revoked.revoked_at is not None


@pytest.mark.asyncio
async def test_many_logins_leave_one_active_session(client: AsyncClient, payloads):
    """Test N creates for one user settle on exactly one active session, the last"""
    tokens = []
    for _ in range(5):
        response = await client.post(f"{BASE}/create-session", json=payloads.get("create_alice"))
        tokens.append(response.json()["session_token"])

    response = await client.post(f"{BASE}/session-list", json={"user_id": 7, "active_flag": True})

    content = response.json()["content"]
    assert len(content) == 1

    response = await client.post(f"{BASE}/validate-session-token", json={"session_token": tokens[-1]})
    assert response.json()["session_id"] == content[0]["session_id"]


@pytest.mark.asyncio
async def test_other_users_sessions_untouched(client: AsyncClient, payloads):
    bob = (await client.post(f"{BASE}/create-session", json=payloads.get("create_bob"))).json()
    await client.post(f"{BASE}/create-session", json=payloads.get("create_alice"))

    response = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": bob["session_token"]}
    )
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_validate_round_trip(client: AsyncClient, payloads, clock):
    """Test validate returns what create was given and touches last_seen_at"""
    created = (await client.post(f"{BASE}/create-session", json=payloads.get("create_alice"))).json()
    clock.advance(minutes=5)

    response = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": created["session_token"]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["valid"] is True
    assert data["session_id"] == created["session_id"]
    assert data["user_id"] == 7
    assert data["user_name"] == "alice"
    assert sorted(data["roles"]) == ["REPORTER", "USER"]
    assert data["status"] == "ACTIVE"
    assert data["last_seen_at"] == clock.now.isoformat()
    assert data["ip_address"] == "10.0.0.1"
    assert "session_token" not in data


@pytest.mark.asyncio
async def test_validate_expired_session_transitions_once(
    client: AsyncClient, payloads, clock, fetch_session
):
    """Test first late validation reports EXPIRED, later ones INVALID_OR_REVOKED"""
    created = (
        await client.post(f"{BASE}/create-session", json=payloads.get("create_alice", ttl_minutes=10))
    ).json()
    clock.advance(minutes=10)

    at_expiry = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": created["session_token"]}
    )
    assert at_expiry.status_code == 200

    clock.advance(seconds=1)
    first = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": created["session_token"]}
    )
    assert first.status_code == 401
    assert first.json()["reason"] == "EXPIRED"

    second = await client.post(
        f"{BASE}/validate-session-token", json={"session_token": created["session_token"]}
    )
    assert second.status_code == 401
    assert second.json()["reason"] == "INVALID_OR_REVOKED"

    expired = await fetch_session(created["session_id"])
    assert expired.status == SessionStatus.expired
    assert expired.active_flag is False
    assert expired.revoked_at is None


@pytest.mark.asyncio
async def test_validate_missing_token(client: AsyncClient):
    response = await client.post(f"{BASE}/validate-session-token", json={})

    assert response.status_code == 401
    assert response.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_validate_by_id(client: AsyncClient, payloads):
    created = (await client.post(f"{BASE}/create-session", json=payloads.get("create_alice"))).json()

    response = await client.post(
        f"{BASE}/validate-session-id", json={"session_id": created["session_id"]}
    )

    assert response.status_code == 200
    assert response.json()["session_token"] == created["session_token"]


@pytest.mark.asyncio
async def test_validate_by_id_errors(client: AsyncClient):
    missing = await client.post(f"{BASE}/validate-session-id", json={})
    assert missing.status_code == 400
    assert missing.json()["error"]["code"] == "INVALID_PAYLOAD"

    unknown = await client.post(f"{BASE}/validate-session-id", json={"session_id": 12345})
    assert unknown.status_code == 401
    assert unknown.json() == {"valid": False, "reason": "INVALID_OR_REVOKED"}


@pytest.mark.asyncio
async def test_create_with_user_id_revokes_name_only_session(client: AsyncClient, fetch_session):
    """Test a login carrying user_id still revokes an earlier name-only session"""
    name_only = (
        await client.post(f"{BASE}/create-session", json={"user_name": "alice"})
    ).json()
    await client.post(f"{BASE}/create-session", json={"user_name": "alice", "user_id": 7})

    response = await client.post(
        f"{BASE}/session-list", json={"user_name": "alice", "active_flag": True}
    )

    assert response.json()["total_elements"] == 1
    revoked = await fetch_session(name_only["session_id"])
    assert revoked.status == SessionStatus.revoked
    assert revoked.revoked_by == "SYSTEM"


@pytest.mark.asyncio
async def test_create_session_ttl_out_of_range(client: AsyncClient):
    response = await client.post(
        f"{BASE}/create-session", json={"user_name": "bob", "ttl_minutes": 10**12}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_PAYLOAD"
