"""Services for accounts business logic."""

from .exceptions import (
    UserRegistrationError,
    InvalidCredentialsError,
    InactiveAccountError,
    InvalidVerificationCodeError,
    AlreadyVerifiedError,
    UserNotFoundError,
)
from .user_registration import register_user
from .user_authentication import authenticate_user
from .email_verification import verify_user_email, resend_verification_code

__all__ = [
    # Exceptions
    'UserRegistrationError',
    'InvalidCredentialsError',
    'InactiveAccountError',
    'InvalidVerificationCodeError',
    'AlreadyVerifiedError',
    'UserNotFoundError',
    # Services
    'register_user',
    'authenticate_user',
    'verify_user_email',
    'resend_verification_code',
]
