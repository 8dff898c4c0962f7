"""Email verification service."""

from django.db import transaction
from django.contrib.auth import get_user_model

from apps.accounts.emails import send_verification_email

from .exceptions import (
    AlreadyVerifiedError,
    InvalidVerificationCodeError,
    UserNotFoundError,
)
from .user_registration import generate_verification_code

User = get_user_model()


@transaction.atomic
def verify_user_email(*, email: str, code: str) -> User:
    """
    Verify a user's email with the code they received.

    Raises:
        UserNotFoundError: If no account uses this email
        InvalidVerificationCodeError: If the code does not match
    """
    try:
        user = (
            User.objects
            .select_for_update()
            .get(email__iexact=email.strip())
        )
    except User.DoesNotExist:
        raise UserNotFoundError("User not found")

    if not user.verification_code or user.verification_code != str(code).strip():
        raise InvalidVerificationCodeError("Invalid verification code")

    user.email_verified = True
    user.verification_code = ''
    user.save(update_fields=['email_verified', 'verification_code', 'updated_at'])

    return user


def resend_verification_code(*, email: str) -> None:
    """
    Issue a fresh verification code.

    Raises:
        UserNotFoundError: If no account uses this email
        AlreadyVerifiedError: If the email is already verified
    """
    with transaction.atomic():
        try:
            user = (
                User.objects
                .select_for_update()
                .get(email__iexact=email.strip())
            )
        except User.DoesNotExist:
            raise UserNotFoundError("User not found")

        if user.email_verified:
            raise AlreadyVerifiedError("Email already verified")

        user.verification_code = generate_verification_code()
        user.save(update_fields=['verification_code', 'updated_at'])

    send_verification_email(user.email, user.verification_code)
