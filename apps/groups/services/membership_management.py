"""
Membership management service.

The group row is locked while members are added or removed, so the
member cap and the per-group email uniqueness hold under concurrency.
"""

import logging
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction, IntegrityError
from django.db.models import Q, QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupBalance, Member
from apps.subscriptions.services import LimitGate, get_limit_gate

from .exceptions import (
    GroupNotFoundError,
    MemberNotFoundError,
    NotAdminError,
    DuplicateMemberError,
    CannotRemoveCreatorError,
)
from .group_management import get_group_by_id

logger = logging.getLogger(__name__)


def _lock_group(group_id):
    try:
        return (
            Group.objects
            .select_for_update()
            .select_related('created_by')
            .get(id=group_id)
        )
    except (Group.DoesNotExist, ValueError, DjangoValidationError):
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def add_member(
    *,
    group_id: UUID,
    added_by: User,
    name: str,
    email: str,
    gate: Optional[LimitGate] = None,
) -> Member:
    """
    Add a member to a group (admin only).

    If an account with this email exists it is linked right away;
    otherwise the member stays unlinked until the invitee registers.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotAdminError: If added_by is not the group creator
        DuplicateMemberError: If the email is already in the group
        MemberLimitExceededError: If the owner's plan cap is reached
    """
    gate = gate or get_limit_gate()
    email = email.strip().lower()

    with transaction.atomic():
        group = _lock_group(group_id)

        if not group.is_admin(added_by):
            raise NotAdminError("Only group admin can add members")

        if group.members.filter(email=email).exists():
            raise DuplicateMemberError("Member already exists in group")

        gate.check_member_addition(
            group.created_by,
            group.members.count(),
        ).raise_if_denied()

        existing_user = get_user_model().objects.filter(email__iexact=email).first()

        try:
            with transaction.atomic():
                member = Member.objects.create(
                    group=group,
                    user=existing_user,
                    name=name.strip(),
                    email=email,
                )
        except IntegrityError:
            raise DuplicateMemberError("Member already exists in group")

        if existing_user is not None:
            GroupBalance.objects.get_or_create(group=group, user=existing_user)

        gate.record_member_added(group.created_by)

    logger.info("Member %s added to group %s", email, group.id)
    return member


def remove_member(
    *,
    group_id: UUID,
    member_id: UUID,
    removed_by: User,
    gate: Optional[LimitGate] = None,
) -> None:
    """
    Remove a member from a group (admin only).

    ``member_id`` may be the member's own id or the linked user's id.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotAdminError: If removed_by is not the group creator
        MemberNotFoundError: If no such member exists in the group
        CannotRemoveCreatorError: If the target is the creator
    """
    gate = gate or get_limit_gate()

    with transaction.atomic():
        group = _lock_group(group_id)

        if not group.is_admin(removed_by):
            raise NotAdminError("Only group admin can remove members")

        try:
            member = group.members.get(Q(id=member_id) | Q(user_id=member_id))
        except (Member.DoesNotExist, ValueError, DjangoValidationError):
            raise MemberNotFoundError("Member not found in this group")

        if member.user_id is not None and member.user_id == group.created_by_id:
            raise CannotRemoveCreatorError("The group creator cannot be removed")

        member.delete()
        gate.record_member_removed(group.created_by)

    logger.info("Member %s removed from group %s", member.email, group.id)


def get_group_members(*, group_id: UUID, user: Optional[User] = None) -> QuerySet[Member]:
    """
    Get all members of a group in join order.

    Raises:
        GroupNotFoundError: If group doesn't exist or isn't visible to ``user``
    """
    group = get_group_by_id(group_id=group_id, user=user)

    return (
        Member.objects
        .filter(group=group)
        .select_related('user')
        .order_by('joined_at')
    )
