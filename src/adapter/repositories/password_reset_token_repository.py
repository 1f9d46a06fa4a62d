from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, token: PasswordResetToken) -> PasswordResetToken:
        """Persist a new or modified password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def has_recent_active_token(
        self, user_id: UUID, since: datetime, now: datetime
    ) -> bool:
        """Check for an unused, unexpired token created after `since`"""
        stmt = (
            select(PasswordResetToken.id)
            .where(
                PasswordResetToken.user_id == user_id,
                PasswordResetToken.created_at > since,
                PasswordResetToken.used == False,
                PasswordResetToken.expires_at > now,
            )
            .limit(1)
        )
        result = await self.session.exec(stmt)
        return result.first() is not None

    async def find_active_by_value(
        self, value: str, now: datetime, for_update: bool = False
    ) -> Optional[PasswordResetToken]:
        """Get the unused, unexpired token matching a raw token value, optionally locking the row"""
        stmt = (
            select(PasswordResetToken)
            .where(
                PasswordResetToken.token_hash == PasswordResetToken.hash_value(value),
                PasswordResetToken.used == False,
                PasswordResetToken.expires_at > now,
            )
        )
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def mark_used(self, token_id: UUID) -> bool:
        """Mark one token used; False if it was already used"""
        stmt = (
            update(PasswordResetToken)
            .where(PasswordResetToken.id == token_id, PasswordResetToken.used == False)
            .values(used=True)
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount > 0

    async def mark_all_used_for_user(self, user_id: UUID) -> int:
        """Mark every unused token of a user as used"""
        stmt = (
            update(PasswordResetToken)
            .where(PasswordResetToken.user_id == user_id, PasswordResetToken.used == False)
            .values(used=True)
        )
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        """Delete tokens with expires_at <= now, used or not"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at <= now)
        result = await self.session.exec(stmt)
        await self.session.flush()
        return result.rowcount
