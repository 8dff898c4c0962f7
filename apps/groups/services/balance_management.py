"""
Group balance bookkeeping.

A user's balance in a group is what others still owe them minus what
they still owe others, counting only unpaid participant shares of the
group's expenses.
"""

from collections import defaultdict
from decimal import Decimal
from typing import Dict
from uuid import UUID

from django.db import transaction
from django.db.models import F, QuerySet

from apps.expenses.models import Participant
from apps.groups.models import Group, GroupBalance


def compute_group_balances(group: Group) -> Dict[UUID, Decimal]:
    """Net balance per user id; positive means the user is owed money."""
    nets = defaultdict(lambda: Decimal('0.00'))

    for user_id in group.members.filter(is_active=True, user__isnull=False).values_list('user_id', flat=True):
        nets[user_id] += Decimal('0.00')
    nets[group.created_by_id] += Decimal('0.00')

    outstanding = (
        Participant.objects
        .filter(expense__group=group, paid=False)
        .exclude(user_id=F('expense__paid_by_id'))
        .values_list('user_id', 'expense__paid_by_id', 'share')
    )
    for debtor_id, creditor_id, share in outstanding:
        nets[creditor_id] += share
        nets[debtor_id] -= share

    return dict(nets)


@transaction.atomic
def recalculate_balances(group: Group) -> None:
    """Rewrite the group's balance rows from its current expenses."""
    nets = compute_group_balances(group)

    GroupBalance.objects.filter(group=group).exclude(user_id__in=nets.keys()).delete()
    for user_id, balance in nets.items():
        GroupBalance.objects.update_or_create(
            group=group,
            user_id=user_id,
            defaults={'balance': balance},
        )


def get_group_balances(*, group: Group) -> QuerySet[GroupBalance]:
    return (
        GroupBalance.objects
        .filter(group=group)
        .select_related('user')
        .order_by('-balance')
    )
