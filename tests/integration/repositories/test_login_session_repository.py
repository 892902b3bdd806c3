"""
Integration tests for LoginSessionRepository against SQLite

The conditional updates are what make the state machine safe under
concurrent requests, so they are checked against a real database.
"""
from datetime import datetime, timedelta

import pytest
from sqlmodel.ext.asyncio.session import AsyncSession

from src.adapter.repositories.login_session_repository import LoginSessionRepository
from src.domain.entities import LoginSession, LoginSessionStatus


async def _create(db_session: AsyncSession, **overrides) -> LoginSession:
    now = datetime.utcnow()
    fields = dict(
        email="a@b.com",
        verification_code="123456",
        status=LoginSessionStatus.code_sent,
        code_expires=now + timedelta(minutes=10),
        expires_at=now + timedelta(minutes=15),
        last_sent_at=now,
    )
    fields.update(overrides)
    repo = LoginSessionRepository(db_session)
    login_session = await repo.create(LoginSession(**fields))
    await db_session.commit()
    return login_session


@pytest.mark.asyncio
async def test_consume_succeeds_exactly_once(db_session: AsyncSession):
    login_session = await _create(db_session)
    repo = LoginSessionRepository(db_session)
    now = datetime.utcnow()

    first = await repo.consume(login_session.id, "123456", now)
    second = await repo.consume(login_session.id, "123456", now)
    await db_session.commit()

    assert first is True
    assert second is False
    stored = await repo.get_by_id(login_session.id)
    assert stored.status == LoginSessionStatus.verified
    assert stored.verified_at is not None


@pytest.mark.asyncio
async def test_consume_rejects_replaced_code(db_session: AsyncSession):
    login_session = await _create(db_session)
    repo = LoginSessionRepository(db_session)
    now = datetime.utcnow()

    await repo.replace_code(login_session.id, "654321", now + timedelta(minutes=10), now)

    assert await repo.consume(login_session.id, "123456", now) is False
    assert await repo.consume(login_session.id, "654321", now) is True


@pytest.mark.asyncio
async def test_consume_rejects_expired_code(db_session: AsyncSession):
    now = datetime.utcnow()
    login_session = await _create(db_session, code_expires=now - timedelta(seconds=1))
    repo = LoginSessionRepository(db_session)

    assert await repo.consume(login_session.id, "123456", now) is False


@pytest.mark.asyncio
async def test_replace_code_never_touches_expires_at(db_session: AsyncSession):
    login_session = await _create(db_session)
    expires_at = login_session.expires_at
    repo = LoginSessionRepository(db_session)
    now = datetime.utcnow()

    updated = await repo.replace_code(login_session.id, "999999", now + timedelta(hours=1), now)
    await db_session.commit()

    assert updated is True
    stored = await repo.get_by_id(login_session.id)
    assert stored.verification_code == "999999"
    assert stored.code_expires == now + timedelta(hours=1)
    assert stored.last_sent_at == now
    assert stored.expires_at == expires_at


@pytest.mark.asyncio
async def test_replace_code_refused_after_window(db_session: AsyncSession):
    now = datetime.utcnow()
    login_session = await _create(db_session, expires_at=now - timedelta(seconds=1))
    repo = LoginSessionRepository(db_session)

    assert await repo.replace_code(login_session.id, "999999", now, now) is False


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status",
    [LoginSessionStatus.verified, LoginSessionStatus.expired, LoginSessionStatus.exhausted],
)
async def test_terminal_sessions_do_not_move(db_session: AsyncSession, status):
    login_session = await _create(db_session, status=status)
    repo = LoginSessionRepository(db_session)
    now = datetime.utcnow()

    assert await repo.replace_code(login_session.id, "999999", now, now) is False
    assert await repo.consume(login_session.id, "123456", now) is False
    assert await repo.mark_expired(login_session.id) is False


@pytest.mark.asyncio
async def test_failed_attempts_exhaust_session(db_session: AsyncSession):
    login_session = await _create(db_session)
    repo = LoginSessionRepository(db_session)

    results = [await repo.record_failed_attempt(login_session.id, 3) for _ in range(3)]
    await db_session.commit()

    assert results == [False, False, True]
    stored = await repo.get_by_id(login_session.id)
    assert stored.failed_attempts == 3
    assert stored.status == LoginSessionStatus.exhausted


@pytest.mark.asyncio
async def test_mark_code_sent_only_from_created(db_session: AsyncSession):
    login_session = await _create(db_session, status=LoginSessionStatus.created)
    repo = LoginSessionRepository(db_session)

    assert await repo.mark_code_sent(login_session.id) is True
    assert await repo.mark_code_sent(login_session.id) is False


@pytest.mark.asyncio
async def test_delete_stale(db_session: AsyncSession):
    now = datetime.utcnow()
    old = await _create(db_session, expires_at=now - timedelta(hours=3))
    current = await _create(db_session)
    repo = LoginSessionRepository(db_session)

    deleted = await repo.delete_stale(now - timedelta(hours=1))
    await db_session.commit()

    assert deleted == 1
    assert await repo.get_by_id(old.id) is None
    assert await repo.get_by_id(current.id) is not None


@pytest.mark.asyncio
async def test_recent_initiations_counts_window_per_email(db_session: AsyncSession):
    now = datetime.utcnow()
    await _create(db_session, email="a@b.com", created_at=now - timedelta(minutes=20))
    oldest = await _create(db_session, email="A@B.com", created_at=now - timedelta(minutes=10))
    await _create(db_session, email="a@b.com", created_at=now - timedelta(minutes=1))
    await _create(db_session, email="other@b.com", created_at=now)
    repo = LoginSessionRepository(db_session)

    count, first_created = await repo.recent_initiations("a@b.com", now - timedelta(minutes=15))

    assert count == 2
    assert first_created == oldest.created_at


@pytest.mark.asyncio
async def test_recent_initiations_none_in_window(db_session: AsyncSession):
    repo = LoginSessionRepository(db_session)

    count, first_created = await repo.recent_initiations("a@b.com", datetime.utcnow())

    assert count == 0
    assert first_created is None
