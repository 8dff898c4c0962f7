"""
Domain-specific exceptions for expenses app.

Validation problems are 400s, ownership problems 403s, missing rows 404s.
A failed fee write during settlement is a 500 and aborts the settlement.
"""

from apps.common.exceptions import (
    AuthorizationError,
    DependencyError,
    DomainValidationError,
    NotFoundError,
)


# Validation

class InvalidAmountError(DomainValidationError):
    """Raised when the amount is missing or not positive."""
    default_detail = 'Amount must be greater than zero.'
    default_code = 'invalid_amount'


class InvalidDescriptionError(DomainValidationError):
    """Raised when the description is blank or too long."""
    default_detail = 'Description is required (max 100 characters).'
    default_code = 'invalid_description'


class InvalidShareSumError(DomainValidationError):
    """Raised when participant shares don't add up to the amount."""
    default_detail = 'Total participant shares must equal expense amount.'
    default_code = 'invalid_share_sum'


class InvalidParticipantsError(DomainValidationError):
    """Raised when the participant list cannot be used for the split."""
    default_detail = 'Invalid participants.'
    default_code = 'invalid_participants'


class ExpenseLockedError(DomainValidationError):
    """Raised when changing amount or participants after a payment."""
    default_detail = 'Amount and participants cannot change once a participant has paid.'
    default_code = 'expense_locked'


class SettlementAmountMismatchError(DomainValidationError):
    """Raised when the settled amount differs from the participant's share."""
    default_detail = "Settlement amount must equal the participant's share."
    default_code = 'settlement_amount_mismatch'


class ParticipantAlreadySettledError(DomainValidationError):
    """Raised when settling a participant who has already paid."""
    default_detail = 'Participant has already settled.'
    default_code = 'participant_already_settled'


# Authorization

class NotAuthorizedForGroupError(AuthorizationError):
    """Raised when the group is missing or the user isn't a member."""
    default_detail = 'Not authorized to add expenses to this group.'
    default_code = 'not_authorized_for_group'


class NotExpenseOwnerError(AuthorizationError):
    """Raised when someone other than the payer modifies an expense."""
    default_detail = 'Only the payer can modify this expense.'
    default_code = 'not_expense_owner'


class CannotSettleError(AuthorizationError):
    """Raised when the acting user may not settle this participant."""
    default_detail = 'You cannot settle this participant.'
    default_code = 'cannot_settle'


# Not found

class ExpenseNotFoundError(NotFoundError):
    default_detail = 'Expense not found.'
    default_code = 'expense_not_found'


class ParticipantNotFoundError(NotFoundError):
    default_detail = 'Participant not found.'
    default_code = 'participant_not_found'


# Dependencies

class FeeProcessingFailedError(DependencyError):
    """Raised when the settlement fee could not be recorded."""
    default_detail = 'Failed to process transaction fee.'
    default_code = 'fee_processing_failed'
