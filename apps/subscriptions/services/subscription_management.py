"""Subscription status and usage reporting."""

import logging

from django.db import transaction

from apps.accounts.models import User
from apps.subscriptions import state
from apps.subscriptions.plans import get_plan_limits

from .exceptions import InvalidStatusTransitionError

logger = logging.getLogger(__name__)


@transaction.atomic
def transition_subscription(*, user: User, new_status: str) -> User:
    """
    Move a user's subscription to ``new_status``.

    Raises:
        InvalidStatusTransitionError: If the state machine forbids the move
    """
    locked = User.objects.select_for_update().get(pk=user.pk)

    if not state.can_transition(locked.subscription_status, new_status):
        raise InvalidStatusTransitionError(
            f"Cannot change subscription from {locked.subscription_status} to {new_status}"
        )

    previous = locked.subscription_status
    locked.subscription_status = new_status
    locked.save(update_fields=['subscription_status', 'updated_at'])
    logger.info("Subscription of %s moved %s -> %s", locked.email, previous, new_status)

    user.subscription_status = new_status
    return locked


def get_subscription_summary(*, user: User) -> dict:
    """Plan, status, limits and usage for the profile screen."""
    limits = get_plan_limits(user.plan)
    return {
        'plan': user.plan,
        'status': user.subscription_status,
        'current_period_end': user.current_period_end,
        'limits': limits.as_dict(),
        'usage': {
            'groups_created': user.groups_created,
            'members_added': user.members_added,
            'total_expenses': user.total_expenses,
            'last_reset': user.usage_last_reset,
        },
    }
