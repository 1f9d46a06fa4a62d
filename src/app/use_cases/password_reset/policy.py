"""
Password reset policy constants and user-facing messages.
"""

from datetime import timedelta

# Lookback for throttling repeated reset requests per user
RATE_LIMIT_WINDOW = timedelta(minutes=5)

DEFAULT_TOKEN_TTL = timedelta(minutes=45)

# Same text whether or not the account exists (no email enumeration)
REQUEST_ACCEPTED_MESSAGE = (
    "If the email is registered, password reset instructions have been sent."
)
RATE_LIMITED_MESSAGE = (
    "A password reset email was sent recently. "
    "Check your inbox or wait a few minutes before trying again."
)
INTERNAL_ERROR_MESSAGE = "Internal server error. Please try again later."

TOKEN_VALID_MESSAGE = "Token is valid."
TOKEN_INVALID_MESSAGE = "Invalid or expired token."
TOKEN_VALIDATION_ERROR_MESSAGE = "Could not validate token."

PASSWORD_MISMATCH_MESSAGE = "Passwords do not match."
PASSWORD_RESET_SUCCESS_MESSAGE = (
    "Password reset successfully. You can now log in with your new password."
)
