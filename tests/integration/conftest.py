import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from finance_auth.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from finance_auth.api.app import create_app
from finance_auth.app.services.credential_hasher import CredentialHasher
from finance_auth.depends import (
    get_credential_hasher,
    get_notification_sender,
    get_unit_of_work,
)
from tests.fixtures.json_loader import TestDataLoader
from tests.fixtures.notifications import RecordingNotificationSender


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest_asyncio.fixture
def notifier():
    return RecordingNotificationSender()


@pytest_asyncio.fixture
def hasher():
    return CredentialHasher(memory_cost=8, time_cost=1, parallelism=1)


@pytest_asyncio.fixture
async def client(session_factory, notifier, hasher):
    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        async with session_factory() as session:
            yield SqlAlchemyUnitOfWork(session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_credential_hasher] = lambda: hasher
    app.dependency_overrides[get_notification_sender] = lambda: notifier

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport, base_url=f"http://test{ApplicationConfig.API_PREFIX}/"
    ) as ac:
        yield ac
