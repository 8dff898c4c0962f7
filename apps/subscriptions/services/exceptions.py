"""Limit gate and subscription errors."""

from apps.common.exceptions import DomainValidationError, LimitExceededError


class TrialExpiredError(LimitExceededError):
    """Subscription period ended."""
    default_detail = '14-day trial period ended. Please subscribe to continue using the app.'
    default_code = 'trial_expired'


class GroupLimitExceededError(LimitExceededError):
    """User already created as many groups as the plan allows."""
    default_detail = 'Group limit reached. Upgrade your plan to create more groups.'
    default_code = 'group_limit_exceeded'


class MemberLimitExceededError(LimitExceededError):
    """Group already holds as many members as the owner's plan allows."""
    default_detail = 'Member limit reached. Upgrade your plan to add more members.'
    default_code = 'member_limit_exceeded'


class SubscriptionInactiveError(LimitExceededError):
    """Subscription status does not permit the operation."""
    default_detail = 'Your subscription is not active.'
    default_code = 'subscription_inactive'


class InvalidStatusTransitionError(DomainValidationError):
    """Requested subscription status change is not allowed."""
    default_detail = 'Invalid subscription status transition.'
    default_code = 'invalid_status_transition'
