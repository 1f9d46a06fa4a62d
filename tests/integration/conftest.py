import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import (
    get_clock,
    get_password_hasher,
    get_password_reset_notifier,
    get_unit_of_work,
)
from tests.utils.frozen_clock import FrozenClock
from tests.utils.recording_notifier import RecordingNotifier


@pytest_asyncio.fixture
def clock():
    return FrozenClock()


@pytest_asyncio.fixture
def notifier():
    return RecordingNotifier()


@pytest_asyncio.fixture
def password_hasher():
    # Low cost factor keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


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


@pytest_asyncio.fixture
async def client(db_session, clock, notifier, password_hasher):
    from httpx import ASGITransport
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_password_reset_notifier] = lambda: notifier
    app.dependency_overrides[get_password_hasher] = lambda: password_hasher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
