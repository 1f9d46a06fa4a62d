"""
Password Reset Use Cases

Request, validate and consume password reset tokens, plus the expiry sweep.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .validate_reset_token_use_case import ValidateResetTokenUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .sweep_expired_reset_tokens_use_case import SweepExpiredResetTokensUseCase
from .dtos import (
    RequestPasswordResetResponse,
    ValidateResetTokenResponse,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ValidateResetTokenUseCase",
    "ResetPasswordUseCase",
    "SweepExpiredResetTokensUseCase",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "ValidateResetTokenResponse",
    "ResetPasswordResponse",
]
