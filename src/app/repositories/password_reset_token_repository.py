from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def save(self, token: PasswordResetToken) -> PasswordResetToken:
        """Persist a new or modified password reset token"""
        pass

    @abstractmethod
    async def has_recent_active_token(
        self, user_id: UUID, since: datetime, now: datetime
    ) -> bool:
        """Check for an unused, unexpired token created after `since`"""
        pass

    @abstractmethod
    async def find_active_by_value(
        self, value: str, now: datetime, for_update: bool = False
    ) -> Optional[PasswordResetToken]:
        """Get the unused, unexpired token matching a raw token value, optionally locking the row"""
        pass

    @abstractmethod
    async def mark_used(self, token_id: UUID) -> bool:
        """Mark one token used; False if it was already used"""
        pass

    @abstractmethod
    async def mark_all_used_for_user(self, user_id: UUID) -> int:
        """Mark every unused token of a user as used"""
        pass

    @abstractmethod
    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens with expires_at <= now, used or not"""
        pass
