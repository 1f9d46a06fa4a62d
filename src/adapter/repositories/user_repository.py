from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.user_repository import IUserRepository
from src.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str, for_update: bool = False) -> Optional[User]:
        """Get user by email address"""
        stmt = select(User).where(User.email == email)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID, for_update: bool = False) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save(self, user: User) -> User:
        """Persist a new or modified user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
