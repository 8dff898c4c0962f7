"""
Subscription status state machine.

Statuses, the transitions between them, and which mutating operations
each status permits.
"""
from apps.accounts.models import SubscriptionStatus

CREATE_GROUP = 'create_group'
ADD_MEMBER = 'add_member'

MUTATING_OPERATIONS = frozenset({CREATE_GROUP, ADD_MEMBER})

TRANSITIONS = {
    SubscriptionStatus.INCOMPLETE: {
        SubscriptionStatus.ACTIVE,
        SubscriptionStatus.TRIALING,
        SubscriptionStatus.CANCELED,
    },
    SubscriptionStatus.TRIALING: {
        SubscriptionStatus.ACTIVE,
        SubscriptionStatus.PAST_DUE,
        SubscriptionStatus.CANCELED,
    },
    SubscriptionStatus.ACTIVE: {
        SubscriptionStatus.PAST_DUE,
        SubscriptionStatus.CANCELED,
    },
    SubscriptionStatus.PAST_DUE: {
        SubscriptionStatus.ACTIVE,
        SubscriptionStatus.CANCELED,
    },
    SubscriptionStatus.CANCELED: {
        SubscriptionStatus.ACTIVE,
    },
}

ALLOWED_OPERATIONS = {
    SubscriptionStatus.TRIALING: MUTATING_OPERATIONS,
    SubscriptionStatus.ACTIVE: MUTATING_OPERATIONS,
    SubscriptionStatus.PAST_DUE: MUTATING_OPERATIONS,
    SubscriptionStatus.CANCELED: frozenset(),
    SubscriptionStatus.INCOMPLETE: frozenset(),
}


def can_transition(current: str, new: str) -> bool:
    return new in TRANSITIONS.get(current, set())


def allows(status: str, operation: str) -> bool:
    """Whether a subscription in ``status`` may perform ``operation``."""
    return operation in ALLOWED_OPERATIONS.get(status, frozenset())
