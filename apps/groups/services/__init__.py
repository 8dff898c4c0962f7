"""
Groups app services layer.

Services contain business logic and orchestrate operations across models.
All state-changing operations use transactions and row locks.
"""

from .exceptions import (
    GroupNotFoundError,
    MemberNotFoundError,
    NotAdminError,
    DuplicateMemberError,
    CannotRemoveCreatorError,
)

from .group_management import (
    create_group,
    list_groups,
    update_group,
    delete_group,
    get_group_by_id,
)

from .membership_management import (
    add_member,
    remove_member,
    get_group_members,
)

from .balance_management import (
    compute_group_balances,
    recalculate_balances,
    get_group_balances,
)


__all__ = [
    # Exceptions
    'GroupNotFoundError',
    'MemberNotFoundError',
    'NotAdminError',
    'DuplicateMemberError',
    'CannotRemoveCreatorError',

    # Group Management
    'create_group',
    'list_groups',
    'update_group',
    'delete_group',
    'get_group_by_id',

    # Membership Management
    'add_member',
    'remove_member',
    'get_group_members',

    # Balances
    'compute_group_balances',
    'recalculate_balances',
    'get_group_balances',
]
