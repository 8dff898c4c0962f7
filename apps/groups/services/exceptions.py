"""
Domain-specific exceptions for groups app.

Each maps onto the shared error taxonomy, so views can let them
propagate to the project exception handler.
"""

from apps.common.exceptions import (
    AuthorizationError,
    DomainValidationError,
    NotFoundError,
)


class GroupNotFoundError(NotFoundError):
    """Raised when a group does not exist or is inaccessible."""
    default_detail = 'Group not found.'
    default_code = 'group_not_found'


class MemberNotFoundError(NotFoundError):
    """Raised when a member is not part of the group."""
    default_detail = 'Member not found.'
    default_code = 'member_not_found'


class NotAdminError(AuthorizationError):
    """Raised when a non-admin attempts an admin-only action."""
    default_detail = 'Only group admin can perform this action.'
    default_code = 'not_admin'


class DuplicateMemberError(DomainValidationError):
    """Raised when the email is already a member of the group."""
    default_detail = 'Member already exists in group.'
    default_code = 'duplicate_member'


class CannotRemoveCreatorError(DomainValidationError):
    """Raised when attempting to remove the group creator."""
    default_detail = 'The group creator cannot be removed.'
    default_code = 'cannot_remove_creator'
