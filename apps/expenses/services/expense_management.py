"""
Expense management service.

Creates, lists, updates and deletes expenses together with their
participant rows. Every write re-checks that the shares add up to the
amount and refreshes the group's balances.
"""

import logging
from collections import defaultdict
from datetime import date as date_type
from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import transaction
from django.db.models import F, Q, QuerySet

from apps.accounts.models import User
from apps.expenses.models import Expense, Participant, SplitType
from apps.groups.services import recalculate_balances

from .exceptions import (
    ExpenseLockedError,
    ExpenseNotFoundError,
    InvalidParticipantsError,
    NotExpenseOwnerError,
)
from .splitting import build_shares
from .validation import (
    group_user_ids,
    resolve_group,
    validate_amount,
    validate_description,
    validate_participant_users,
    validate_share_sum,
)

logger = logging.getLogger(__name__)


def _normalize_entries(entries):
    if entries is None:
        return None
    normalized = []
    for entry in entries:
        entry = dict(entry)
        try:
            entry['user'] = UUID(str(entry['user']))
        except (KeyError, ValueError):
            raise InvalidParticipantsError("Each participant needs a valid user id")
        normalized.append(entry)
    return normalized


def _compute_participants(*, amount, split_type, entries, group, paid_by):
    default_user_ids = group_user_ids(group) if group else [paid_by.id]
    shares = build_shares(
        amount=amount,
        split_type=split_type,
        entries=entries,
        default_user_ids=default_user_ids,
    )
    validate_participant_users([user_id for user_id, _ in shares], group)
    validate_share_sum(amount, [share for _, share in shares])
    return shares


def _write_participants(expense, shares):
    Participant.objects.bulk_create([
        Participant(expense=expense, user_id=user_id, share=share, position=i)
        for i, (user_id, share) in enumerate(shares)
    ])


def _visible_expenses(user):
    return Expense.objects.filter(Q(paid_by=user) | Q(participants__user=user)).distinct()


def create_expense(
    *,
    paid_by: User,
    description: str,
    amount,
    category: str = 'other',
    date: Optional[date_type] = None,
    group_id: Optional[UUID] = None,
    split_type: str = SplitType.EQUAL,
    participants: Optional[Sequence[dict]] = None,
    currency: Optional[str] = None,
) -> Expense:
    """
    Create an expense and its participant shares.

    Without explicit participants an equal split covers the group's
    linked members, or just the payer for a personal expense.

    Args:
        paid_by: User who paid
        description: Short description (max 100 characters)
        amount: Positive amount
        category: Expense category
        date: Expense date (today when omitted)
        group_id: Optional group the expense belongs to
        split_type: equal, custom or percentage
        participants: Dicts with ``user`` and ``share``/``percentage``
        currency: Currency code; defaults to the group's or the payer's

    Returns:
        Created Expense

    Raises:
        InvalidAmountError, InvalidDescriptionError, InvalidShareSumError,
        InvalidParticipantsError, NotAuthorizedForGroupError
    """
    amount = validate_amount(amount)
    description = validate_description(description)
    group = resolve_group(group_id, paid_by)
    entries = _normalize_entries(participants)

    with transaction.atomic():
        shares = _compute_participants(
            amount=amount,
            split_type=split_type,
            entries=entries,
            group=group,
            paid_by=paid_by,
        )

        fields = dict(
            description=description,
            amount=amount,
            currency=currency or (group.currency if group else paid_by.currency),
            category=category,
            paid_by=paid_by,
            group=group,
            split_type=split_type,
        )
        if date is not None:
            fields['date'] = date
        expense = Expense.objects.create(**fields)

        _write_participants(expense, shares)

        User.objects.filter(pk=paid_by.pk).update(total_expenses=F('total_expenses') + 1)

        if group:
            recalculate_balances(group)

    logger.info("Expense %s created by %s", expense.id, paid_by.email)
    return expense


def list_expenses(*, user: User) -> tuple[QuerySet[Expense], dict]:
    """
    Expenses paid by ``user``, newest first, with a summary.

    Returns:
        tuple: (expenses, summary) where summary holds ``total_expenses``,
        ``total_count`` and ``category_summary``
    """
    expenses = (
        Expense.objects
        .filter(paid_by=user)
        .select_related('paid_by', 'group')
        .prefetch_related('participants__user')
        .order_by('-date', '-created_at')
    )

    total = Decimal('0.00')
    by_category = defaultdict(lambda: Decimal('0.00'))
    for expense in expenses:
        total += expense.amount
        by_category[expense.category] += expense.amount

    summary = {
        'total_expenses': total,
        'total_count': len(expenses),
        'category_summary': dict(by_category),
    }
    return expenses, summary


def get_expense(*, expense_id: UUID, user: User) -> Expense:
    """
    Get an expense visible to ``user`` (payer or participant).

    Raises:
        ExpenseNotFoundError: If it doesn't exist or isn't visible
    """
    try:
        return (
            _visible_expenses(user)
            .select_related('paid_by', 'group')
            .prefetch_related('participants__user')
            .get(id=expense_id)
        )
    except (Expense.DoesNotExist, ValueError, DjangoValidationError):
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")


def _lock_owned_expense(expense_id, user):
    try:
        expense = Expense.objects.select_for_update().get(id=expense_id)
    except (Expense.DoesNotExist, ValueError, DjangoValidationError):
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    if expense.paid_by_id != user.pk:
        if expense.participants.filter(user=user).exists():
            raise NotExpenseOwnerError("Only the payer can modify this expense")
        raise ExpenseNotFoundError(f"Expense with ID {expense_id} not found")

    return expense


def update_expense(
    *,
    expense_id: UUID,
    user: User,
    description: Optional[str] = None,
    amount=None,
    category: Optional[str] = None,
    date: Optional[date_type] = None,
    split_type: Optional[str] = None,
    participants: Optional[Sequence[dict]] = None,
    currency: Optional[str] = None,
) -> Expense:
    """
    Update an expense (payer only).

    Changing the amount, split type or participants re-splits the
    expense; this is refused once any participant has paid. An amount
    change alone keeps custom shares as they are, so they must still add
    up to the new amount.

    Raises:
        ExpenseNotFoundError, NotExpenseOwnerError, ExpenseLockedError,
        InvalidAmountError, InvalidDescriptionError, InvalidShareSumError,
        InvalidParticipantsError
    """
    entries = _normalize_entries(participants)

    with transaction.atomic():
        expense = _lock_owned_expense(expense_id, user)
        update_fields = ['updated_at']

        if description is not None:
            expense.description = validate_description(description)
            update_fields.append('description')
        if category is not None:
            expense.category = category
            update_fields.append('category')
        if date is not None:
            expense.date = date
            update_fields.append('date')
        if currency is not None:
            expense.currency = currency
            update_fields.append('currency')

        new_amount = validate_amount(amount) if amount is not None else expense.amount
        new_split_type = split_type or expense.split_type
        resplit = (
            new_amount != expense.amount
            or new_split_type != expense.split_type
            or entries is not None
        )

        if resplit:
            if expense.is_locked:
                raise ExpenseLockedError(
                    "Amount and participants cannot change once a participant has paid"
                )

            existing = list(expense.participants.order_by('position'))
            if entries is None:
                if new_split_type == SplitType.EQUAL:
                    entries = [{'user': p.user_id} for p in existing]
                elif new_split_type == SplitType.CUSTOM:
                    entries = [{'user': p.user_id, 'share': p.share} for p in existing]
                else:
                    raise InvalidParticipantsError(
                        "Participants are required to change a percentage split"
                    )

            shares = _compute_participants(
                amount=new_amount,
                split_type=new_split_type,
                entries=entries,
                group=expense.group,
                paid_by=user,
            )

            expense.participants.all().delete()
            _write_participants(expense, shares)

            expense.amount = new_amount
            expense.split_type = new_split_type
            expense.is_settled = False
            update_fields += ['amount', 'split_type', 'is_settled']

        expense.save(update_fields=update_fields)

        if resplit and expense.group:
            recalculate_balances(expense.group)

    logger.info("Expense %s updated by %s", expense.id, user.email)
    return get_expense(expense_id=expense.id, user=user)


def delete_expense(*, expense_id: UUID, user: User) -> None:
    """
    Delete an expense (payer only).

    Fee records of past settlements stay in the ledger.

    Raises:
        ExpenseNotFoundError, NotExpenseOwnerError
    """
    with transaction.atomic():
        expense = _lock_owned_expense(expense_id, user)
        group = expense.group

        expense.delete()
        User.objects.filter(
            pk=user.pk,
            total_expenses__gt=0,
        ).update(total_expenses=F('total_expenses') - 1)

        if group:
            recalculate_balances(group)

    logger.info("Expense %s deleted by %s", expense_id, user.email)
