from datetime import datetime, timedelta
from itertools import count

import pytest
from unittest.mock import AsyncMock, MagicMock

from src.domain.entities import Session, SessionRole, SessionStatus

NOW = datetime(2026, 1, 15, 12, 0, 0)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def clock():
    return lambda: NOW


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.sessions = MagicMock()
    uow.sessions.get_by_id = AsyncMock(return_value=None)
    uow.sessions.get_by_token = AsyncMock(return_value=None)
    uow.sessions.list_active_by_user = AsyncMock(return_value=[])
    uow.sessions.update = AsyncMock(side_effect=lambda s: s)
    uow.sessions.update_all = AsyncMock(side_effect=lambda sessions: sessions)
    uow.sessions.revoke_all_by_user_id = AsyncMock(return_value=0)
    uow.sessions.delete_expired = AsyncMock(return_value=0)
    uow.sessions.find_filtered = AsyncMock(return_value=([], 0))

    ids = count(1)

    async def assign_id(session):
        session.id = next(ids)
        return session

    uow.sessions.create = AsyncMock(side_effect=assign_id)
    return uow


@pytest.fixture
def token_generator():
    generator = MagicMock()
    generator.generate = MagicMock(side_effect=[f"{i:064x}" for i in range(1, 50)])
    return generator


@pytest.fixture
def make_session():
    """Build an in-memory session; defaults describe an active one"""

    def _make(**overrides):
        fields = dict(
            id=1,
            session_token="a" * 64,
            user_id=7,
            user_name="alice",
            status=SessionStatus.active,
            active_flag=True,
            ip_address="10.0.0.1",
            user_agent="pytest",
            meta_data='{"device": "laptop"}',
            created_by="alice",
            created_date=NOW - timedelta(minutes=30),
            last_seen_at=NOW - timedelta(minutes=5),
            expires_at=NOW + timedelta(minutes=30),
        )
        roles = overrides.pop("roles", ["USER"])
        fields.update(overrides)
        return Session(**fields, roles=[SessionRole(role_name=r) for r in roles])

    return _make
