from datetime import timedelta

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from src.app.services.clock import Clock
from src.app.services.password_hasher import IPasswordHasher
from src.app.services.password_reset_notifier import IPasswordResetNotifier
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.password_reset import (
    RequestPasswordResetUseCase,
    ValidateResetTokenUseCase,
    ResetPasswordUseCase,
    RequestPasswordResetResponse,
    ValidateResetTokenResponse,
    ResetPasswordResponse,
)
from src.depends import (
    get_clock,
    get_password_hasher,
    get_password_reset_notifier,
    get_password_reset_token_ttl,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _status_for(ok: bool) -> int:
    return status.HTTP_200_OK if ok else status.HTTP_400_BAD_REQUEST


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    Validates incoming password reset request.
    """

    email: EmailStr = Field(..., description="User email address")


@router.post("/forgot-password", response_model=RequestPasswordResetResponse)
async def forgot_password(
    request: ForgotPasswordRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    notifier: IPasswordResetNotifier = Depends(get_password_reset_notifier),
    clock: Clock = Depends(get_clock),
    token_ttl: timedelta = Depends(get_password_reset_token_ttl),
):
    """
    Request Password Reset

    Issues a single-use reset token and sends it to the account email.

    Security:
        - No email enumeration (same response for registered/unknown emails)
        - One request per user every 5 minutes while the last token is active

    Returns:
        - 200 OK: Request accepted
        - 400 Bad Request: Rate limited or internal error (see message)
        - 422 Unprocessable Entity: Invalid email format
    """
    use_case = RequestPasswordResetUseCase(uow, notifier, clock, token_ttl=token_ttl)
    result = await use_case.execute(request.email)

    response.status_code = _status_for(result.success)
    return result


@router.get("/reset-password/validate", response_model=ValidateResetTokenResponse)
async def validate_reset_token(
    response: Response,
    token: str = Query(..., min_length=1, description="Password reset token from email"),
    uow: UnitOfWork = Depends(get_unit_of_work),
    clock: Clock = Depends(get_clock),
):
    """
    Validate Password Reset Token

    Read-only check used by the reset form before asking for a new password.

    Returns:
        - 200 OK: Token is valid, body carries the account email
        - 400 Bad Request: Token invalid, expired or already used
    """
    use_case = ValidateResetTokenUseCase(uow, clock)
    result = await use_case.execute(token)

    response.status_code = _status_for(result.valid)
    return result


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Bcrypt only reads the first 72 bytes, so passwords longer than 72 bytes
    (UTF-8 encoded) are rejected.
    """

    token: str = Field(..., min_length=1, description="Password reset token from email")
    new_password: str = Field(..., min_length=8, description="New password (min 8 chars, max 72 bytes)")
    confirm_password: str = Field(..., description="New password, repeated")

    @field_validator("new_password")
    @classmethod
    def check_bcrypt_length(cls, value: str) -> str:
        if len(value.encode()) > 72:
            raise ValueError("Password must be at most 72 bytes long")
        return value


@router.post("/reset-password", response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordRequest,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    password_hasher: IPasswordHasher = Depends(get_password_hasher),
    clock: Clock = Depends(get_clock),
):
    """
    Reset Password

    Consumes the reset token and sets the new password.
    All other reset tokens of the user are invalidated.

    Returns:
        - 200 OK: Password changed
        - 400 Bad Request: Passwords differ, token invalid/expired/used, or internal error
        - 422 Unprocessable Entity: Invalid payload
    """
    use_case = ResetPasswordUseCase(uow, password_hasher, clock)
    result = await use_case.execute(
        request.token, request.new_password, request.confirm_password
    )

    response.status_code = _status_for(result.success)
    return result
