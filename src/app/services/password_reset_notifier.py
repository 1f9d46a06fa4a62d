from abc import ABC, abstractmethod

from src.domain.entities import User


class IPasswordResetNotifier(ABC):
    """Delivers a password reset token to the account owner"""

    @abstractmethod
    async def send_password_reset_notification(self, user: User, token_value: str) -> None:
        """
        Send the reset token to the user's email.

        Raises on delivery failure; callers decide how to report it.
        """
        pass
