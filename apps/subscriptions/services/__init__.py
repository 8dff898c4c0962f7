"""
Subscriptions services layer.

Limit gate, subscription state changes and usage reporting.
"""

from .exceptions import (
    TrialExpiredError,
    GroupLimitExceededError,
    MemberLimitExceededError,
    SubscriptionInactiveError,
    InvalidStatusTransitionError,
)
from .gate import (
    GateDecision,
    LimitGate,
    get_limit_gate,
)
from .subscription_management import (
    transition_subscription,
    get_subscription_summary,
)

__all__ = [
    # Exceptions
    'TrialExpiredError',
    'GroupLimitExceededError',
    'MemberLimitExceededError',
    'SubscriptionInactiveError',
    'InvalidStatusTransitionError',

    # Limit gate
    'GateDecision',
    'LimitGate',
    'get_limit_gate',

    # Subscription management
    'transition_subscription',
    'get_subscription_summary',
]
