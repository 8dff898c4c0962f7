"""
Share calculation for the three split types.

All arithmetic is done in integer cents so the shares always add up to
the expense amount exactly; leftover cents go to the first participants.
"""

from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from apps.expenses.models import SplitType

from .exceptions import InvalidParticipantsError, InvalidShareSumError

CENT = Decimal('0.01')
HUNDRED = Decimal('100')


def _to_cents(amount: Decimal) -> int:
    return int(amount * 100)


def _from_cents(cents: int) -> Decimal:
    return Decimal(cents) / Decimal(100)


def split_equally(amount: Decimal, user_ids: Sequence[UUID]) -> list[tuple[UUID, Decimal]]:
    """
    Split ``amount`` evenly among ``user_ids``.

    Example:
        100.00 among three users gives 33.34, 33.33, 33.33.
    """
    if not user_ids:
        raise InvalidParticipantsError("At least one participant required")

    total_cents = _to_cents(amount)
    base_cents, remainder = divmod(total_cents, len(user_ids))

    return [
        (user_id, _from_cents(base_cents + 1 if i < remainder else base_cents))
        for i, user_id in enumerate(user_ids)
    ]


def split_by_percentage(amount: Decimal, entries: Sequence[dict]) -> list[tuple[UUID, Decimal]]:
    """
    Split ``amount`` by each entry's ``percentage``.

    Percentages must add up to 100. Each share is rounded down to the
    cent and the leftover cents are handed out one by one from the top.
    """
    percentages = []
    for entry in entries:
        percentage = entry.get('percentage')
        if percentage is None:
            raise InvalidParticipantsError("Each participant needs a percentage")
        percentage = Decimal(str(percentage))
        if percentage < 0:
            raise InvalidParticipantsError("Percentages cannot be negative")
        percentages.append(percentage)

    if abs(sum(percentages) - HUNDRED) > CENT:
        raise InvalidShareSumError("Percentages must add up to 100")

    total_cents = _to_cents(amount)
    cents = [int(total_cents * percentage / HUNDRED) for percentage in percentages]
    remainder = total_cents - sum(cents)

    for i in range(remainder):
        cents[i % len(cents)] += 1

    return [(entry['user'], _from_cents(c)) for entry, c in zip(entries, cents)]


def custom_shares(entries: Sequence[dict]) -> list[tuple[UUID, Decimal]]:
    """Take each entry's ``share`` as given."""
    shares = []
    for entry in entries:
        share = entry.get('share')
        if share is None:
            raise InvalidParticipantsError("Each participant needs a share")
        share = Decimal(str(share))
        if share < 0:
            raise InvalidParticipantsError("Shares cannot be negative")
        shares.append((entry['user'], share))
    return shares


def build_shares(
    *,
    amount: Decimal,
    split_type: str,
    entries: Optional[Sequence[dict]] = None,
    default_user_ids: Sequence[UUID] = (),
) -> list[tuple[UUID, Decimal]]:
    """
    Compute ``(user_id, share)`` pairs for an expense.

    Args:
        amount: Expense amount
        split_type: One of ``SplitType``
        entries: Participant dicts with ``user`` and, depending on the
            split type, ``share`` or ``percentage``
        default_user_ids: Users to split among equally when no entries
            are given

    Raises:
        InvalidParticipantsError: Empty, duplicate or incomplete entries
        InvalidShareSumError: Percentages not adding up to 100
    """
    entries = list(entries or [])

    user_ids = [entry['user'] for entry in entries]
    if len(set(user_ids)) != len(user_ids):
        raise InvalidParticipantsError("Each user can only participate once")

    if split_type == SplitType.EQUAL:
        return split_equally(amount, user_ids or list(default_user_ids))

    if not entries:
        raise InvalidParticipantsError(f"Participants are required for a {split_type} split")

    if split_type == SplitType.PERCENTAGE:
        return split_by_percentage(amount, entries)

    return custom_shares(entries)
