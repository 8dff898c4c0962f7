"""
Limit gate.

Decides whether a user may create a group or add a member, and keeps the
usage counters consistent under concurrent requests: every increment is a
single conditional ``UPDATE`` rather than a read followed by a write.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from django.db.models import Case, F, Value, When
from django.utils import timezone

from apps.accounts.models import User, SubscriptionStatus
from apps.subscriptions.plans import PLAN_LIMITS, PlanLimits, get_plan_limits
from apps.subscriptions import state

from .exceptions import (
    GroupLimitExceededError,
    MemberLimitExceededError,
    SubscriptionInactiveError,
    TrialExpiredError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    allowed: bool
    reason: str = ''
    error: Optional[type] = None

    @property
    def code(self):
        return self.error.default_code if self.error else None

    def raise_if_denied(self):
        if not self.allowed:
            raise self.error(self.reason)


ALLOW = GateDecision(allowed=True)


class LimitGate:
    """
    Plan-limit checks for group and member creation.

    Args:
        plans: Plan table to enforce (defaults to ``PLAN_LIMITS``)
        clock: Callable returning the current aware datetime
    """

    def __init__(
        self,
        plans: Optional[Mapping[str, PlanLimits]] = None,
        clock: Callable = timezone.now,
    ):
        self.plans = PLAN_LIMITS if plans is None else plans
        self.clock = clock

    def limits_for(self, user: User) -> PlanLimits:
        return get_plan_limits(user.plan, self.plans)

    def check_group_creation(self, user: User) -> GateDecision:
        """Evaluate the group-creation rules against ``user`` as loaded."""
        if not state.allows(user.subscription_status, state.CREATE_GROUP):
            return GateDecision(
                False,
                f"Your subscription is {user.subscription_status}. Reactivate it to create groups.",
                SubscriptionInactiveError,
            )

        if (
            user.subscription_status == SubscriptionStatus.ACTIVE
            and self.clock() > user.current_period_end
        ):
            return GateDecision(False, TrialExpiredError.default_detail, TrialExpiredError)

        limits = self.limits_for(user)
        if user.groups_created >= limits.max_groups:
            return GateDecision(
                False,
                f"Group limit reached ({limits.max_groups} groups maximum). "
                "Upgrade to premium plan to create more groups.",
                GroupLimitExceededError,
            )

        return ALLOW

    def check_member_addition(self, owner: User, current_member_count: int) -> GateDecision:
        """Evaluate the member cap of the group owner's plan."""
        if not state.allows(owner.subscription_status, state.ADD_MEMBER):
            return GateDecision(
                False,
                f"The group owner's subscription is {owner.subscription_status}.",
                SubscriptionInactiveError,
            )

        limits = self.limits_for(owner)
        if current_member_count >= limits.max_members_per_group:
            return GateDecision(
                False,
                f"Member limit reached ({limits.max_members_per_group} members max)",
                MemberLimitExceededError,
            )

        return ALLOW

    def reserve_group_slot(self, user: User) -> None:
        """
        Check the gate and atomically take one group slot.

        The increment only happens while ``groups_created`` is still below
        the plan limit, so concurrent requests cannot overshoot it even
        when ``user`` holds stale counters.

        Raises:
            SubscriptionInactiveError, TrialExpiredError, GroupLimitExceededError
        """
        decision = self.check_group_creation(user)
        if not decision.allowed:
            logger.info("Group creation denied for %s: %s", user.email, decision.code)
            decision.raise_if_denied()

        limits = self.limits_for(user)
        updated = User.objects.filter(
            pk=user.pk,
            groups_created__lt=limits.max_groups,
        ).update(groups_created=F('groups_created') + 1)

        if not updated:
            logger.info("Group creation denied for %s: limit reached concurrently", user.email)
            raise GroupLimitExceededError(
                f"Group limit reached ({limits.max_groups} groups maximum). "
                "Upgrade to premium plan to create more groups."
            )

        user.refresh_from_db(fields=['groups_created'])

    def release_group_slot(self, user: User) -> None:
        """Give a group slot back, never dropping below zero."""
        User.objects.filter(
            pk=user.pk,
            groups_created__gt=0,
        ).update(groups_created=F('groups_created') - 1)
        user.refresh_from_db(fields=['groups_created'])

    def record_member_added(self, owner: User) -> None:
        User.objects.filter(pk=owner.pk).update(members_added=F('members_added') + 1)

    def record_member_removed(self, owner: User, count: int = 1) -> None:
        """Take ``count`` members off the owner's counter, never below zero."""
        User.objects.filter(pk=owner.pk).update(
            members_added=Case(
                When(members_added__gt=count, then=F('members_added') - count),
                default=Value(0),
            )
        )


def get_limit_gate() -> LimitGate:
    """Gate wired with the project plan table and wall clock."""
    return LimitGate()
