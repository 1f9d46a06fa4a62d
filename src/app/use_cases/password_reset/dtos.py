"""
Password Reset DTOs

Response records returned by the password reset use cases.
Failures are expressed through success/valid flags, never exceptions.
"""

from typing import Optional
from pydantic import BaseModel


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    message: str
    success: bool


class ValidateResetTokenResponse(BaseModel):
    """Response for validate reset token use case"""

    valid: bool
    message: str
    email: Optional[str] = None


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    message: str
    success: bool
