"""Domain-specific exceptions for accounts services."""

from apps.common.exceptions import (
    AuthorizationError,
    DomainValidationError,
    NotFoundError,
)


class UserRegistrationError(DomainValidationError):
    """Raised when user registration fails."""
    default_detail = 'Registration failed.'
    default_code = 'registration_failed'


class InvalidCredentialsError(AuthorizationError):
    """Raised when authentication credentials are invalid."""
    status_code = 401
    default_detail = 'Invalid email or password.'
    default_code = 'invalid_credentials'


class InactiveAccountError(AuthorizationError):
    """Raised when account is deactivated."""
    default_detail = 'Account is deactivated.'
    default_code = 'inactive_account'


class InvalidVerificationCodeError(DomainValidationError):
    """Raised when the email verification code does not match."""
    default_detail = 'Invalid verification code.'
    default_code = 'invalid_verification_code'


class AlreadyVerifiedError(DomainValidationError):
    """Raised when re-sending a code to an already verified account."""
    default_detail = 'Email already verified.'
    default_code = 'already_verified'


class UserNotFoundError(NotFoundError):
    """Raised when user does not exist."""
    default_detail = 'User not found.'
    default_code = 'user_not_found'
