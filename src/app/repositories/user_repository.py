from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str, for_update: bool = False) -> Optional[User]:
        """Get user by email address, optionally locking the row"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID, for_update: bool = False) -> Optional[User]:
        """Get user by ID, optionally locking the row"""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Persist a new or modified user"""
        pass
