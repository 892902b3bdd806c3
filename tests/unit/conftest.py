import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = MagicMock()
    uow.users.get_by_email = AsyncMock()
    uow.users.get_by_id = AsyncMock()

    uow.login_sessions = MagicMock()
    uow.login_sessions.create = AsyncMock(side_effect=lambda s: s)
    uow.login_sessions.get_by_id = AsyncMock()
    uow.login_sessions.recent_initiations = AsyncMock(return_value=(0, None))
    uow.login_sessions.mark_code_sent = AsyncMock(return_value=True)
    uow.login_sessions.replace_code = AsyncMock(return_value=True)
    uow.login_sessions.consume = AsyncMock(return_value=True)
    uow.login_sessions.record_failed_attempt = AsyncMock(return_value=False)
    uow.login_sessions.mark_expired = AsyncMock(return_value=True)
    uow.login_sessions.delete_stale = AsyncMock(return_value=0)
    return uow


@pytest.fixture
def email_sender():
    sender = MagicMock()
    sender.send = AsyncMock(return_value=True)
    return sender
