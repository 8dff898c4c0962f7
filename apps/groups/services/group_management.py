"""
Group management service.

Handles group CRUD operations. Creation and deletion keep the creator's
``groups_created`` counter in step through the limit gate.
"""

import logging
from typing import Optional
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import Case, Count, F, Prefetch, Q, QuerySet, Value, When

from apps.accounts.models import User
from apps.groups.models import Group, GroupBalance, Member
from apps.subscriptions.services import LimitGate, get_limit_gate

from .exceptions import (
    GroupNotFoundError,
    NotAdminError,
)

logger = logging.getLogger(__name__)


def create_group(
    *,
    name: str,
    owner: User,
    description: str = '',
    currency: Optional[str] = None,
    gate: Optional[LimitGate] = None,
) -> Group:
    """
    Create a new group with the creator as its first member.

    Steps, in one transaction:
    1. Gate check and atomic reservation of a group slot
    2. Create the group
    3. Create the creator's membership and balance row

    Args:
        name: Group name
        owner: User creating (and administering) the group
        description: Optional description
        currency: Group currency; defaults to the owner's billing currency
        gate: Limit gate to enforce (project default when omitted)

    Returns:
        Created Group instance

    Raises:
        SubscriptionInactiveError, TrialExpiredError, GroupLimitExceededError
    """
    gate = gate or get_limit_gate()

    with transaction.atomic():
        gate.reserve_group_slot(owner)

        group = Group.objects.create(
            name=name.strip(),
            description=description.strip(),
            currency=currency or owner.billing_currency,
            created_by=owner,
        )

        Member.objects.create(
            group=group,
            user=owner,
            name=owner.get_display_name(),
            email=owner.email,
        )
        GroupBalance.objects.create(group=group, user=owner)

    logger.info("Group %s created by %s", group.id, owner.email)
    return group


def list_groups(*, user: User) -> QuerySet[Group]:
    """Groups the user created or belongs to, newest first."""
    return (
        Group.objects
        .filter(Q(created_by=user) | Q(members__user=user, members__is_active=True))
        .select_related('created_by')
        .prefetch_related('members')
        .distinct()
        .order_by('-created_at')
    )


def get_group_by_id(*, group_id: UUID, user: Optional[User] = None) -> Group:
    """
    Get a group by ID with its members.

    When ``user`` is given the group must be visible to them (creator or
    active member); otherwise it is reported as not found.

    Raises:
        GroupNotFoundError: If group doesn't exist or isn't visible
    """
    try:
        group = (
            Group.objects
            .select_related('created_by')
            .prefetch_related(
                Prefetch('members', queryset=Member.objects.select_related('user'))
            )
            .get(id=group_id)
        )
    except (Group.DoesNotExist, ValueError, DjangoValidationError):
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if user is not None and not (group.is_admin(user) or group.has_member(user)):
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    return group


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    user: User,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Group:
    """
    Update group details (creator only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotAdminError: If user is not the creator
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except (Group.DoesNotExist, ValueError, DjangoValidationError):
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not group.is_admin(user):
        raise NotAdminError("Only group admin can update the group")

    update_fields = ['updated_at']

    if name is not None:
        group.name = name.strip()
        update_fields.append('name')

    if description is not None:
        group.description = description.strip()
        update_fields.append('description')

    group.save(update_fields=update_fields)

    return group


def delete_group(*, group_id: UUID, user: User, gate: Optional[LimitGate] = None) -> None:
    """
    Delete a group (creator only) and release the creator's group slot.

    Cascading deletes remove members, balances and the group's expenses;
    the payers' ``total_expenses`` and the owner's ``members_added``
    counters are reduced to match before the rows go.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotAdminError: If user is not the creator
    """
    gate = gate or get_limit_gate()

    with transaction.atomic():
        try:
            group = Group.objects.select_for_update().get(id=group_id)
        except (Group.DoesNotExist, ValueError, DjangoValidationError):
            raise GroupNotFoundError(f"Group with ID {group_id} not found")

        if not group.is_admin(user):
            raise NotAdminError("Only group admin can delete the group")

        _release_group_usage(group, gate)
        group.delete()
        gate.release_group_slot(user)

    logger.info("Group %s deleted by %s", group_id, user.email)


def _release_group_usage(group: Group, gate: LimitGate) -> None:
    """Undo the usage counted for the group's expenses and added members."""
    expense_counts = (
        group.expenses
        .values('paid_by')
        .annotate(count=Count('id'))
        .order_by()
    )
    for row in expense_counts:
        User.objects.filter(pk=row['paid_by']).update(
            total_expenses=Case(
                When(total_expenses__gt=row['count'], then=F('total_expenses') - row['count']),
                default=Value(0),
            )
        )

    added = group.members.exclude(user_id=group.created_by_id).count()
    if added:
        gate.record_member_removed(group.created_by, count=added)
