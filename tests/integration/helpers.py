from typing import List
from uuid import UUID

import bcrypt
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.domain.entities import PasswordResetToken, User


async def create_test_user(
    db_session: AsyncSession,
    email: str = "test@example.com",
    password: str = "OldPass123!",
) -> User:
    """Create and commit a user with a bcrypt-hashed password."""
    user = User(
        email=email,
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


async def get_user(db_session: AsyncSession, user_id: UUID) -> User:
    result = await db_session.exec(
        select(User).where(User.id == user_id).execution_options(populate_existing=True)
    )
    return result.one()


async def get_tokens(db_session: AsyncSession, user_id: UUID) -> List[PasswordResetToken]:
    stmt = (
        select(PasswordResetToken)
        .where(PasswordResetToken.user_id == user_id)
        .order_by(PasswordResetToken.created_at)
        .execution_options(populate_existing=True)
    )
    result = await db_session.exec(stmt)
    return list(result.all())
