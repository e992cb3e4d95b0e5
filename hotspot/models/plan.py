"""
Plan catalog.

Plans are fixed at deploy time and live in memory; vouchers and purchases
reference them by id only.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import datetime, timedelta


def add_months(start: datetime, months: int) -> datetime:
    """
    Add calendar months, clamping the day to the target month's length
    (e.g. Jan 31 + 1 month => Feb 28/29). Time of day and tzinfo are kept.
    """
    y = start.year + (start.month - 1 + months) // 12
    m = (start.month - 1 + months) % 12 + 1
    day = min(start.day, monthrange(y, m)[1])
    return start.replace(year=y, month=m, day=day)


@dataclass(frozen=True)
class Plan:
    id: str
    name: str
    price: str
    description: str
    profile_name: str
    duration_days: int = 0
    duration_months: int = 0

    def expires_at(self, start: datetime) -> datetime:
        if self.duration_months:
            return add_months(start, self.duration_months)
        return start + timedelta(days=self.duration_days)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'description': self.description,
            'profile_name': self.profile_name,
        }


WIFI_PLANS: tuple[Plan, ...] = (
    Plan(
        id='daily',
        name='Luco-Day Plan',
        price='UGX 1,000',
        description='24 hours of unlimited internet access.',
        profile_name='Luco-Day',
        duration_days=1,
    ),
    Plan(
        id='weekly',
        name='Luco-Week Plan',
        price='UGX 5,000',
        description='7 days of unlimited internet access.',
        profile_name='Luco-Week',
        duration_days=7,
    ),
    Plan(
        id='monthly',
        name='Luco-Month Plan',
        price='UGX 20,000',
        description='30 days of unlimited internet access.',
        profile_name='Luco-Month',
        duration_months=1,
    ),
)

_PLANS_BY_ID = {plan.id: plan for plan in WIFI_PLANS}


def list_plans() -> list[Plan]:
    return list(WIFI_PLANS)


def get_plan(plan_id) -> Plan | None:
    return _PLANS_BY_ID.get(plan_id)


def compute_expiry(plan_id, used_at: datetime) -> datetime | None:
    """Expiry of a voucher of ``plan_id`` consumed at ``used_at``; None for an unknown plan."""
    plan = get_plan(plan_id)
    if plan is None:
        return None
    return plan.expires_at(used_at)
