"""
PasswordResetToken Entity

Single-use, time-limited password reset tokens.
"""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Tuple
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - single-use password reset tokens.

    Business Rules:
    - The raw value is 32 bytes from `secrets`, sent to the user only
    - Only the SHA-256 hash of the value is stored
    - expires_at = created_at + TTL
    - used only ever goes from False to True
    - Active iff not used and not yet expired
    - Expired rows are deleted by the periodic sweep
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id")
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    used: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_user_id", "user_id"),
        Index("idx_password_reset_user_created", "user_id", "created_at"),
    )

    @staticmethod
    def hash_value(value: str) -> str:
        return hashlib.sha256(value.encode()).hexdigest()

    @classmethod
    def issue(
        cls, user_id: UUID, now: datetime, ttl: timedelta
    ) -> Tuple["PasswordResetToken", str]:
        """
        Create a fresh token for a user.

        Returns:
            Tuple of (entity to persist, raw token value to send to the user)
        """
        value = secrets.token_urlsafe(32)
        token = cls(
            user_id=user_id,
            token_hash=cls.hash_value(value),
            used=False,
            created_at=now,
            expires_at=now + ttl,
        )
        return token, value

    def is_active(self, now: datetime) -> bool:
        return not self.used and now < self.expires_at
