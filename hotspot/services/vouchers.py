"""
Voucher lookup and purchase.

The purchase marks a voucher used with a conditional update and records the
purchase in the same transaction, so a voucher is sold at most once and a
used voucher always has its purchase row.
"""
import enum
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError

from hotspot import db
from hotspot.models.base import to_naive_utc, utcnow
from hotspot.models.plan import get_plan, list_plans
from hotspot.models.purchased_voucher import PurchasedVoucher
from hotspot.models.voucher import Voucher
from hotspot.services import sms

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActiveVoucher:
    code: str
    plan_name: str
    expires_at: datetime


@dataclass
class ActiveVoucherLookup:
    vouchers: List[ActiveVoucher]
    sms_sent: bool = False


class PurchaseOutcome(enum.Enum):
    SUCCESS = 'success'
    UNAVAILABLE = 'unavailable'
    PLAN_NOT_FOUND = 'plan_not_found'
    RECORD_FAILED = 'record_failed'


@dataclass
class PurchaseResult:
    outcome: PurchaseOutcome
    voucher: Optional[Voucher] = None
    purchase: Optional[PurchasedVoucher] = None
    sms_sent: bool = False
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self):
        return self.outcome is PurchaseOutcome.SUCCESS


def _best_effort(action, *args):
    """Run a side effect whose failure must not change the caller's outcome."""
    try:
        return bool(action(*args))
    except Exception:
        log.exception("Side effect %s failed", getattr(action, '__name__', action))
        return False


# --- Active voucher lookup ---

def get_active_vouchers_for_phone(phone_number, now=None):
    """
    Unexpired vouchers bought by ``phone_number``, newest expiry first.

    Returns None when there is nothing active, which sends the customer on
    to plan selection. When something is found the codes are texted to the
    number as well.
    """
    now = to_naive_utc(now) if now is not None else utcnow()
    log.info("Checking active vouchers for phone %s", phone_number)

    try:
        rows = (
            db.session.query(PurchasedVoucher, Voucher)
            .outerjoin(Voucher, PurchasedVoucher.voucher_id == Voucher.id)
            .filter(
                PurchasedVoucher.phone_number == phone_number,
                PurchasedVoucher.expires_at > now,
            )
            .order_by(PurchasedVoucher.expires_at.desc())
            .all()
        )
    except SQLAlchemyError:
        log.exception("Error fetching active vouchers for %s", phone_number)
        return None

    active = []
    for purchase, voucher in rows:
        if voucher is None:
            log.warning("Missing voucher data for purchase of voucher %s", purchase.voucher_id)
            continue
        if not voucher.code or not voucher.plan_id:
            log.warning("Invalid voucher data for voucher %s", voucher.id)
            continue
        plan = get_plan(voucher.plan_id)
        if plan is None:
            log.warning("Plan not found for voucher %s: %s", voucher.id, voucher.plan_id)
            continue
        active.append(ActiveVoucher(code=voucher.code, plan_name=plan.name, expires_at=purchase.expires_at))

    if not active:
        log.info("No active vouchers found for %s", phone_number)
        return None

    log.info("Found %d active vouchers for %s", len(active), phone_number)
    sent = _best_effort(sms.send_active_vouchers_sms, phone_number, active)
    return ActiveVoucherLookup(vouchers=active, sms_sent=sent)


# --- Voucher listing ---

def get_vouchers_for_plan(plan_id):
    return (
        Voucher.query
        .filter(Voucher.plan_id == plan_id, Voucher.is_used.is_(False))
        .all()
    )


# --- Purchase ---

def purchase_voucher(voucher_id, phone_number, now=None):
    used_at = to_naive_utc(now) if now is not None else utcnow()

    try:
        marked = db.session.execute(
            update(Voucher)
            .where(Voucher.id == voucher_id, Voucher.is_used.is_(False))
            .values(is_used=True, used_at=used_at, updated_at=used_at)
            .execution_options(synchronize_session=False)
        )
    except (SQLAlchemyError, OverflowError) as exc:
        db.session.rollback()
        log.exception("Error updating voucher %s", voucher_id)
        return PurchaseResult(PurchaseOutcome.UNAVAILABLE, errors=[str(exc)])

    if marked.rowcount != 1:
        db.session.rollback()
        log.info("Voucher %s is unavailable", voucher_id)
        return PurchaseResult(PurchaseOutcome.UNAVAILABLE)

    voucher = db.session.get(Voucher, voucher_id, populate_existing=True)
    plan = get_plan(voucher.plan_id)
    if plan is None:
        db.session.rollback()
        log.error("Could not find plan %s for voucher %s", voucher.plan_id, voucher_id)
        return PurchaseResult(PurchaseOutcome.PLAN_NOT_FOUND)

    purchase = PurchasedVoucher(
        voucher_id=voucher.id,
        phone_number=phone_number,
        purchased_at=used_at,
        expires_at=plan.expires_at(used_at),
    )
    try:
        db.session.add(purchase)
        db.session.commit()
    except SQLAlchemyError as exc:
        # the voucher update is part of the same transaction and goes with it
        db.session.rollback()
        log.exception("Error inserting purchased voucher %s", voucher_id)
        return PurchaseResult(PurchaseOutcome.RECORD_FAILED, errors=[str(exc)])

    log.info("Voucher %s sold to %s, expires %s", voucher.id, phone_number, purchase.expires_at)

    sent = _best_effort(sms.send_voucher_sms, phone_number, voucher.code, plan.name)
    return PurchaseResult(PurchaseOutcome.SUCCESS, voucher=voucher, purchase=purchase, sms_sent=sent)


# --- Inventory ---

def summarize_availability(vouchers):
    """Voucher counts overall and per catalog plan for the given vouchers."""
    by_plan = {plan.id: {'total': 0, 'used': 0, 'available': 0} for plan in list_plans()}
    for voucher in vouchers:
        counts = by_plan.setdefault(voucher.plan_id, {'total': 0, 'used': 0, 'available': 0})
        counts['total'] += 1
        counts['used' if voucher.is_used else 'available'] += 1

    return {
        'total': sum(c['total'] for c in by_plan.values()),
        'used': sum(c['used'] for c in by_plan.values()),
        'available': sum(c['available'] for c in by_plan.values()),
        'by_plan': by_plan,
    }


def get_availability():
    return summarize_availability(Voucher.query.all())


def get_voucher_inventory():
    """All vouchers grouped by plan, with stats computed from that same list."""
    vouchers = Voucher.query.order_by(Voucher.plan_id, Voucher.id).all()
    grouped = {plan.id: [] for plan in list_plans()}
    for voucher in vouchers:
        grouped.setdefault(voucher.plan_id, []).append(voucher)
    return grouped, summarize_availability(vouchers)
