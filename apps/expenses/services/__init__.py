"""
Expenses services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations run inside transactions.
"""

from .exceptions import (
    InvalidAmountError,
    InvalidDescriptionError,
    InvalidShareSumError,
    InvalidParticipantsError,
    ExpenseLockedError,
    SettlementAmountMismatchError,
    ParticipantAlreadySettledError,
    NotAuthorizedForGroupError,
    NotExpenseOwnerError,
    CannotSettleError,
    ExpenseNotFoundError,
    ParticipantNotFoundError,
    FeeProcessingFailedError,
)

from .splitting import (
    build_shares,
    split_equally,
    split_by_percentage,
)

from .expense_management import (
    create_expense,
    list_expenses,
    get_expense,
    update_expense,
    delete_expense,
)

from .settlement import settle


__all__ = [
    # Exceptions
    'InvalidAmountError',
    'InvalidDescriptionError',
    'InvalidShareSumError',
    'InvalidParticipantsError',
    'ExpenseLockedError',
    'SettlementAmountMismatchError',
    'ParticipantAlreadySettledError',
    'NotAuthorizedForGroupError',
    'NotExpenseOwnerError',
    'CannotSettleError',
    'ExpenseNotFoundError',
    'ParticipantNotFoundError',
    'FeeProcessingFailedError',

    # Splitting
    'build_shares',
    'split_equally',
    'split_by_percentage',

    # Expense Management
    'create_expense',
    'list_expenses',
    'get_expense',
    'update_expense',
    'delete_expense',

    # Settlement
    'settle',
]
