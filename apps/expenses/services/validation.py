"""
Expense input validation.

Each check raises the matching domain error and returns the cleaned value.
"""

from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError

from apps.accounts.models import User
from apps.groups.models import Group

from .exceptions import (
    InvalidAmountError,
    InvalidDescriptionError,
    InvalidParticipantsError,
    InvalidShareSumError,
    NotAuthorizedForGroupError,
)

MAX_DESCRIPTION_LENGTH = 100
SHARE_TOLERANCE = Decimal('0.01')


def validate_amount(amount) -> Decimal:
    if amount is None:
        raise InvalidAmountError("Valid amount is required")
    try:
        amount = Decimal(str(amount))
    except InvalidOperation:
        raise InvalidAmountError("Valid amount is required")
    if not amount.is_finite() or amount <= 0:
        raise InvalidAmountError("Amount must be greater than zero")
    return amount


def validate_description(description: Optional[str]) -> str:
    description = (description or '').strip()
    if not description:
        raise InvalidDescriptionError("Description is required")
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidDescriptionError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
        )
    return description


def validate_share_sum(amount: Decimal, shares: Iterable[Decimal]) -> None:
    """Shares must add up to ``amount`` within one cent."""
    total = sum(shares, Decimal('0'))
    if abs(total - amount) > SHARE_TOLERANCE:
        raise InvalidShareSumError(
            f"Total participant shares ({total}) must equal expense amount ({amount})"
        )


def resolve_group(group_id: Optional[UUID], user: User) -> Optional[Group]:
    """
    Load the expense's group, which the user must belong to.

    Raises:
        NotAuthorizedForGroupError: Group missing or user not a member
    """
    if not group_id:
        return None

    try:
        group = Group.objects.get(id=group_id)
    except (Group.DoesNotExist, ValueError, DjangoValidationError):
        raise NotAuthorizedForGroupError("Not authorized to add expenses to this group")

    if not (group.is_admin(user) or group.has_member(user)):
        raise NotAuthorizedForGroupError("Not authorized to add expenses to this group")

    return group


def group_user_ids(group: Group) -> list[UUID]:
    """Linked active members in join order, creator included."""
    user_ids = list(
        group.members
        .filter(is_active=True, user__isnull=False)
        .order_by('joined_at')
        .values_list('user_id', flat=True)
    )
    if group.created_by_id not in user_ids:
        user_ids.insert(0, group.created_by_id)
    return user_ids


def validate_participant_users(user_ids: Iterable[UUID], group: Optional[Group]) -> None:
    """
    Every participant must be an existing user and, for group
    expenses, a member of the group.
    """
    user_ids = set(user_ids)
    found = set(
        get_user_model().objects.filter(id__in=user_ids).values_list('id', flat=True)
    )
    if found != user_ids:
        raise InvalidParticipantsError("Participant user not found")

    if group is not None:
        outsiders = user_ids - set(group_user_ids(group))
        if outsiders:
            raise InvalidParticipantsError("All participants must be members of the group")
