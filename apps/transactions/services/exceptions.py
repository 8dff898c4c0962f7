"""
Domain-specific exceptions for transactions app.
"""

from apps.common.exceptions import DomainValidationError, NotFoundError


class InvalidPeriodError(DomainValidationError):
    """Raised when the revenue period is not month or year."""
    default_detail = "Period must be 'month' or 'year'."
    default_code = 'invalid_period'


class InvalidTransactionTransitionError(DomainValidationError):
    """Raised when a ledger status change is not allowed."""
    default_detail = 'Invalid transaction status transition.'
    default_code = 'invalid_transaction_transition'


class TransactionNotFoundError(NotFoundError):
    default_detail = 'Transaction not found.'
    default_code = 'transaction_not_found'
