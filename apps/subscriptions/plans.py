"""
Plan tiers and their capability limits.

This is the single source of plan limits for the whole project. The
``LimitGate`` receives a table (this one by default) instead of keeping
its own copy of the numbers.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal
from typing import Dict, Mapping, Optional

from apps.accounts.models import PlanTier


@dataclass(frozen=True)
class PlanLimits:
    max_groups: int
    max_members_per_group: int
    can_upload_receipts: bool
    can_use_categories: bool
    can_create_business_groups: bool
    can_use_multi_currency: bool
    can_export_data: bool
    can_use_api: bool
    price: Decimal

    def as_dict(self):
        return asdict(self)


PLAN_LIMITS: Dict[str, PlanLimits] = {
    PlanTier.BASIC: PlanLimits(
        max_groups=3,
        max_members_per_group=5,
        can_upload_receipts=False,
        can_use_categories=True,
        can_create_business_groups=False,
        can_use_multi_currency=False,
        can_export_data=False,
        can_use_api=False,
        price=Decimal('3'),
    ),
    PlanTier.PREMIUM: PlanLimits(
        max_groups=15,
        max_members_per_group=25,
        can_upload_receipts=True,
        can_use_categories=True,
        can_create_business_groups=False,
        can_use_multi_currency=True,
        can_export_data=True,
        can_use_api=False,
        price=Decimal('10'),
    ),
    PlanTier.BUSINESS: PlanLimits(
        max_groups=35,
        max_members_per_group=35,
        can_upload_receipts=True,
        can_use_categories=True,
        can_create_business_groups=True,
        can_use_multi_currency=True,
        can_export_data=True,
        can_use_api=True,
        price=Decimal('35'),
    ),
}

# Unknown tiers get the most restrictive limits
FALLBACK_TIER = PlanTier.BASIC


def get_plan_limits(tier: str, table: Optional[Mapping[str, PlanLimits]] = None) -> PlanLimits:
    """Look up a tier's limits, falling back to the most restrictive tier."""
    table = PLAN_LIMITS if table is None else table
    return table.get(tier) or table[FALLBACK_TIER]


def list_plans(table: Optional[Mapping[str, PlanLimits]] = None):
    """Return ``[{'name': tier, **limits}, ...]`` in table order."""
    table = PLAN_LIMITS if table is None else table
    return [{'name': str(tier), **limits.as_dict()} for tier, limits in table.items()]
