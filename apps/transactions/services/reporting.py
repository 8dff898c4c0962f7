"""
Read-only ledger queries: founder revenue and per-user history.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from django.conf import settings
from django.db.models import Count, Sum
from django.db.models.query import QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.transactions.models import Transaction

from .exceptions import InvalidPeriodError

PERIODS = ('month', 'year')


def period_start(period: str, now: Optional[datetime] = None) -> datetime:
    """First instant of the current calendar month or year."""
    if period not in PERIODS:
        raise InvalidPeriodError(f"Invalid period '{period}'. Use 'month' or 'year'.")

    now = now or timezone.now()
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if period == 'year':
        start = start.replace(month=1)
    return start


def get_founder_revenue(*, period: str = 'month', now: Optional[datetime] = None) -> dict:
    """
    Sum founder fees per currency since the start of ``period``.

    Only completed subscription and settlement_fee transactions count.
    Amounts in different currencies are added as-is for the grand total.

    Returns:
        dict with ``period``, ``since``, ``total_revenue``,
        ``transaction_count`` and ``by_currency``
    """
    since = period_start(period, now)

    rows = (
        Transaction.objects
        .revenue()
        .filter(created_at__gte=since)
        .values('currency')
        .annotate(total_revenue=Sum('fee'), transaction_count=Count('id'))
        .order_by('currency')
    )

    by_currency = [
        {
            'currency': row['currency'],
            'total_revenue': row['total_revenue'] or Decimal('0'),
            'transaction_count': row['transaction_count'],
        }
        for row in rows
    ]

    return {
        'period': period,
        'since': since,
        'total_revenue': sum((row['total_revenue'] for row in by_currency), Decimal('0')),
        'transaction_count': sum(row['transaction_count'] for row in by_currency),
        'by_currency': by_currency,
    }


def get_transaction_history(*, user: User, limit: Optional[int] = None) -> QuerySet[Transaction]:
    """Most recent transactions of ``user``, newest first."""
    limit = limit or settings.TRANSACTION_HISTORY_LIMIT
    return Transaction.objects.filter(user=user).order_by('-created_at')[:limit]
