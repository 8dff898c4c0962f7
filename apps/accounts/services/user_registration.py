"""User registration service."""

import logging
import secrets

from django.db import transaction, IntegrityError
from django.contrib.auth import get_user_model

from apps.accounts.emails import send_verification_email, send_welcome_email
from apps.groups.models import GroupBalance, Member

from .exceptions import UserRegistrationError

User = get_user_model()

logger = logging.getLogger(__name__)


def generate_verification_code() -> str:
    """Six-digit numeric code sent by email."""
    return f"{100000 + secrets.randbelow(900000)}"


def register_user(
    *,
    email: str,
    password: str,
    name: str,
    country: str = 'UAE',
    currency: str = 'USD',
) -> User:
    """
    Register a new user and issue an email verification code.

    Group invitations sent to this email before the account existed are
    linked to the new user.

    Args:
        email: User's email address (stored lowercased)
        password: User's password (will be hashed)
        name: Display name
        country: One of the supported countries
        currency: Preferred display currency

    Returns:
        Created User instance

    Raises:
        UserRegistrationError: If the email is taken or creation fails
    """
    if User.objects.filter(email__iexact=email).exists():
        raise UserRegistrationError("User already exists with this email")

    try:
        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=name,
                country=country,
                currency=currency,
                verification_code=generate_verification_code(),
            )

            pending = Member.objects.filter(user__isnull=True, email=user.email)
            group_ids = list(pending.values_list('group_id', flat=True))
            linked = pending.update(user=user)
            GroupBalance.objects.bulk_create(
                [GroupBalance(group_id=group_id, user=user) for group_id in group_ids],
                ignore_conflicts=True,
            )
    except IntegrityError:
        raise UserRegistrationError("User already exists with this email")

    if linked:
        logger.info("Linked %d pending group invitation(s) to %s", linked, user.email)

    # Emails go out after the account is committed
    send_verification_email(user.email, user.verification_code)
    send_welcome_email(user.email, user.name)

    return user
