"""
Ledger writes.

Every money movement the application knows about is appended here as a
``Transaction``; existing rows only ever change status.
"""

import logging
from decimal import Decimal
from uuid import UUID

from django.conf import settings
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction

from apps.accounts.models import User
from apps.transactions.models import (
    Transaction,
    TransactionStatus,
    TransactionType,
)

from .exceptions import (
    InvalidTransactionTransitionError,
    TransactionNotFoundError,
)

logger = logging.getLogger(__name__)


def fee_percentage() -> Decimal:
    """Settlement fee rate as a percentage, e.g. ``Decimal('1.5')``."""
    return (settings.SETTLEMENT_FEE_RATE * 100).normalize()


def calculate_settlement_fee(amount: Decimal) -> tuple[Decimal, Decimal]:
    """
    Split a settlement amount into founder fee and net.

    The fee is ``amount * SETTLEMENT_FEE_RATE`` without rounding, so
    ``fee + net == amount`` exactly.

    Example:
        >>> calculate_settlement_fee(Decimal('200.00'))
        (Decimal('3.00000'), Decimal('197.00000'))
    """
    fee = amount * settings.SETTLEMENT_FEE_RATE
    return fee, amount - fee


def record_settlement_fee(
    *,
    user: User,
    amount: Decimal,
    currency: str,
    expense_id: UUID,
    payer_id: UUID,
    payee_id: UUID,
) -> Transaction:
    """
    Append the founder-fee record for one settlement.

    Args:
        user: Acting user who settled
        amount: Settled amount
        currency: Ledger currency
        expense_id: Settled expense
        payer_id: User paying the share
        payee_id: User receiving the money (the expense payer)

    Returns:
        Completed settlement_fee Transaction
    """
    fee, net = calculate_settlement_fee(amount)

    record = Transaction.objects.create(
        type=TransactionType.SETTLEMENT_FEE,
        user=user,
        amount=amount,
        currency=currency,
        fee=fee,
        net_amount=net,
        description=f"Settlement fee for expense {expense_id}",
        status=TransactionStatus.COMPLETED,
        metadata={
            'expense_id': str(expense_id),
            'payer_id': str(payer_id),
            'payee_id': str(payee_id),
            'settlement_amount': str(amount),
            'fee_percentage': str(fee_percentage()),
        },
    )

    logger.info("Settlement fee %s %s recorded for expense %s", fee, currency, expense_id)
    return record


@transaction.atomic
def update_transaction_status(*, transaction_id: UUID, new_status: str) -> Transaction:
    """
    Move a transaction along the ledger's status rules.

    Raises:
        TransactionNotFoundError: If the transaction doesn't exist
        InvalidTransactionTransitionError: If the change isn't allowed
    """
    try:
        record = Transaction.objects.select_for_update().get(id=transaction_id)
    except (Transaction.DoesNotExist, ValueError, DjangoValidationError):
        raise TransactionNotFoundError(f"Transaction with ID {transaction_id} not found")

    if not record.can_transition_to(new_status):
        raise InvalidTransactionTransitionError(
            f"Cannot change transaction status from {record.status} to {new_status}"
        )

    record.transition_status(new_status)
    return record
