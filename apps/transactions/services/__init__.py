"""
Transactions services layer.

Ledger writes (settlement fees, subscription payments, status changes)
and read-only revenue and history reports.
"""

from .exceptions import (
    InvalidPeriodError,
    InvalidTransactionTransitionError,
    TransactionNotFoundError,
)

from .ledger import (
    fee_percentage,
    calculate_settlement_fee,
    record_settlement_fee,
    update_transaction_status,
)

from .reporting import (
    period_start,
    get_founder_revenue,
    get_transaction_history,
)


__all__ = [
    # Exceptions
    'InvalidPeriodError',
    'InvalidTransactionTransitionError',
    'TransactionNotFoundError',

    # Ledger
    'fee_percentage',
    'calculate_settlement_fee',
    'record_settlement_fee',
    'update_transaction_status',

    # Reporting
    'period_start',
    'get_founder_revenue',
    'get_transaction_history',
]
