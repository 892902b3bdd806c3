from typing import List

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from tests.fixtures.json_loader import TestDataLoader
from src.depends import get_email_sender, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import IEmailSender
from src.domain.entities import User, UserRole


class RecordingEmailSender(IEmailSender):
    """Keeps every message instead of sending it; can be told to fail"""

    def __init__(self):
        self.outbox: List[dict] = []
        self.fail = False

    async def send(self, to: str, subject: str, text: str, html: str) -> bool:
        if self.fail:
            return False
        self.outbox.append({"to": to, "subject": subject, "text": text, "html": html})
        return True

    def last_code(self) -> str:
        """Digits of the most recent verification email"""
        text = self.outbox[-1]["text"]
        return text.split("Your verification code is: ", 1)[1].split("\n", 1)[0].strip()


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest_asyncio.fixture
async def create_user(db_session, test_data):
    """Seed a user from test_data.json; returns (user_id, email, role)"""

    async def _create(name: str = "client"):
        data = test_data.user(name)
        user = User(email=data["email"], name=data["name"], role=UserRole(data["role"]))
        db_session.add(user)
        await db_session.commit()
        return user.id, user.email, data["role"]

    return _create


@pytest_asyncio.fixture
async def client(db_session, email_sender):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest_asyncio.fixture
async def load_login_session(db_session):
    """Fresh read of a login session row"""
    from uuid import UUID
    from sqlmodel import select
    from src.domain.entities import LoginSession

    async def _load(session_id):
        stmt = (
            select(LoginSession)
            .where(LoginSession.id == UUID(str(session_id)))
            .execution_options(populate_existing=True)
        )
        result = await db_session.exec(stmt)
        return result.one_or_none()

    return _load


@pytest_asyncio.fixture
async def age_login_session(db_session, load_login_session):
    """Move a login session's clocks into the past, as if time had passed"""

    async def _age(session_id, delta):
        login_session = await load_login_session(session_id)
        login_session.code_expires = login_session.code_expires - delta
        login_session.expires_at = login_session.expires_at - delta
        login_session.last_sent_at = login_session.last_sent_at - delta
        login_session.created_at = login_session.created_at - delta
        db_session.add(login_session)
        await db_session.commit()
        return login_session

    return _age
