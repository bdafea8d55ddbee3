"""
Unit tests for List Sessions and Cleanup Sessions Use Cases
"""

from datetime import timedelta

import pytest

from src.app.use_cases.sessions import (
    CleanupSessionsUseCase,
    ListSessionsUseCase,
    SessionListQuery,
)
from src.domain.entities import SessionStatus


@pytest.mark.asyncio
async def test_list_sessions_with_filters(mock_uow, make_session):
    """Test filters are parsed and passed to the store"""
    mock_uow.sessions.find_filtered.return_value = ([make_session(id=2), make_session(id=1)], 45)

    use_case = ListSessionsUseCase(mock_uow)
    result = await use_case.execute(
        SessionListQuery(user_name="alice", status=" revoked ", active_flag=False, page=1, size=20)
    )

    assert result.is_ok()
    page = result.value
    assert page.page == 1
    assert page.size == 20
    assert page.total_elements == 45
    assert page.total_pages == 3
    assert page.sort == "created_date,desc"
    assert [item.session_id for item in page.content] == [2, 1]
    assert page.content[0].roles == ["USER"]
    mock_uow.sessions.find_filtered.assert_called_once_with(
        user_id=None,
        user_name="alice",
        status=SessionStatus.revoked,
        active_flag=False,
        page=1,
        size=20,
    )


@pytest.mark.asyncio
async def test_list_sessions_defaults_paging(mock_uow):
    """Test negative page and non-positive size fall back to defaults"""
    use_case = ListSessionsUseCase(mock_uow)
    result = await use_case.execute(SessionListQuery(page=-3, size=0))

    assert result.is_ok()
    assert result.value.page == 0
    assert result.value.size == 20
    assert result.value.total_pages == 0
    assert result.value.content == []


@pytest.mark.asyncio
async def test_list_sessions_invalid_status(mock_uow):
    """Test unknown status literal is rejected with the valid set"""
    use_case = ListSessionsUseCase(mock_uow)
    result = await use_case.execute(SessionListQuery(status="INACTIVE"))

    assert result.is_err()
    assert result.error.code == "INVALID_FILTER"
    assert result.error.details["valid_values"] == [
        "PENDING",
        "ACTIVE",
        "EXPIRED",
        "REVOKED",
        "LOGGED_OUT",
    ]
    mock_uow.sessions.find_filtered.assert_not_called()


@pytest.mark.asyncio
async def test_cleanup_sessions(mock_uow, clock, now):
    """Test threshold is now minus retention days"""
    mock_uow.sessions.delete_expired.return_value = 4

    use_case = CleanupSessionsUseCase(mock_uow, clock=clock)
    result = await use_case.execute(7)

    assert result.is_ok()
    assert result.value.deleted == 4
    assert result.value.threshold_date == now - timedelta(days=7)
    mock_uow.sessions.delete_expired.assert_called_once_with(now - timedelta(days=7))
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
@pytest.mark.parametrize("days", [None, -1])
async def test_cleanup_sessions_default_retention(mock_uow, clock, now, days):
    use_case = CleanupSessionsUseCase(mock_uow, clock=clock)
    result = await use_case.execute(days)

    assert result.value.threshold_date == now - timedelta(days=30)


@pytest.mark.asyncio
async def test_cleanup_sessions_retention_out_of_range(mock_uow, clock):
    use_case = CleanupSessionsUseCase(mock_uow, clock=clock)
    result = await use_case.execute(10**9)

    assert result.is_err()
    assert result.error.code == "INVALID_PAYLOAD"
    mock_uow.sessions.delete_expired.assert_not_called()
