from datetime import timedelta

from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from src.adapter.services.logging_password_reset_notifier import LoggingPasswordResetNotifier
from src.adapter.services.system_clock import SystemClock
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.clock import Clock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.password_reset_notifier import IPasswordResetNotifier

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

PASSWORD_RESET_TOKEN_TTL = timedelta(minutes=ApplicationConfig.PASSWORD_RESET_TOKEN_TTL_MINUTES)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_clock() -> Clock:
    return SystemClock()


def get_password_hasher() -> IPasswordHasher:
    return BcryptPasswordHasher()


def get_password_reset_notifier() -> IPasswordResetNotifier:
    return LoggingPasswordResetNotifier(ApplicationConfig.PASSWORD_RESET_URL)


def get_password_reset_token_ttl() -> timedelta:
    return PASSWORD_RESET_TOKEN_TTL
