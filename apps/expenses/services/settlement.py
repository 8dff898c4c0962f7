"""
Settlement engine.

Settling marks one participant's share as paid and records the founder
fee in the ledger. Both writes happen in one database transaction with
the expense and participant rows locked, so either both land or neither
does, and a concurrent second settlement of the same participant sees
it already paid.
"""

import logging
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Q

from apps.accounts.models import User
from apps.expenses.models import Expense, Participant
from apps.groups.services import recalculate_balances
from apps.transactions.services import (
    calculate_settlement_fee,
    fee_percentage,
    record_settlement_fee,
)

from .exceptions import (
    CannotSettleError,
    ExpenseNotFoundError,
    FeeProcessingFailedError,
    ParticipantAlreadySettledError,
    ParticipantNotFoundError,
    SettlementAmountMismatchError,
)
from .validation import SHARE_TOLERANCE, validate_amount

logger = logging.getLogger(__name__)


def _can_settle(expense: Expense, participant: Participant, user: User) -> bool:
    if user.pk in (participant.user_id, expense.paid_by_id):
        return True
    return expense.group is not None and expense.group.is_admin(user)


def settle(
    *,
    expense_id: UUID,
    participant_id: UUID,
    acting_user: User,
    amount: Optional[Decimal] = None,
) -> tuple[Expense, dict]:
    """
    Settle one participant's share of an expense.

    Steps, in one transaction:
    1. Lock the expense and the participant
    2. Check the acting user may settle and the share is still unpaid
    3. Check the amount matches the share (no partial settlements)
    4. Record the settlement_fee transaction
    5. Mark the participant paid and refresh the expense's settled flag
    6. Refresh the group's balances

    Args:
        expense_id: Expense to settle
        participant_id: Participant id, or the participant's user id
        acting_user: User performing the settlement; must be the
            participant, the payer or the group creator
        amount: Settled amount; defaults to the participant's share

    Returns:
        tuple: (expense, fee_breakdown)

    Raises:
        ExpenseNotFoundError, ParticipantNotFoundError, CannotSettleError,
        ParticipantAlreadySettledError, SettlementAmountMismatchError,
        FeeProcessingFailedError
    """
    with transaction.atomic():
        try:
            expense = (
                Expense.objects
                .select_for_update()
                .get(id=expense_id)
            )
        except (Expense.DoesNotExist, ValueError, DjangoValidationError):
            raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

        try:
            participant = (
                Participant.objects
                .select_for_update()
                .get(Q(id=participant_id) | Q(user_id=participant_id), expense=expense)
            )
        except (Participant.DoesNotExist, ValueError, DjangoValidationError):
            raise ParticipantNotFoundError("Participant not found in this expense")

        if not _can_settle(expense, participant, acting_user):
            raise CannotSettleError("You cannot settle this participant")

        if participant.paid:
            raise ParticipantAlreadySettledError("Participant has already settled")

        if amount is None:
            amount = participant.share
        elif participant.share > 0:
            amount = validate_amount(amount)
        else:
            amount = Decimal(str(amount))

        if abs(amount - participant.share) > SHARE_TOLERANCE:
            raise SettlementAmountMismatchError(
                f"Settlement amount ({amount}) must equal the participant's share ({participant.share})"
            )

        try:
            record_settlement_fee(
                user=acting_user,
                amount=amount,
                currency=acting_user.billing_currency,
                expense_id=expense.id,
                payer_id=participant.user_id,
                payee_id=expense.paid_by_id,
            )
        except Exception as exc:
            logger.exception("Settlement fee failed for expense %s", expense.id)
            raise FeeProcessingFailedError("Failed to process transaction fee") from exc

        participant.mark_paid()
        expense.update_settled_status()

        if expense.group:
            recalculate_balances(expense.group)

    fee, net = calculate_settlement_fee(amount)
    breakdown = {
        'settlement_amount': amount,
        'founder_fee': fee,
        'net_to_payee': net,
        'fee_percentage': f"{fee_percentage()}%",
    }

    logger.info(
        "Participant %s settled %s on expense %s (fee %s)",
        participant.user_id, amount, expense.id, fee,
    )
    return expense, breakdown
