"""
Bulk voucher import from hotspot user exports.

The export is a plain comma-separated file with a header row; the voucher
code is the ``Username`` column. Quoted fields are not unescaped beyond
dropping the quote characters, so a code may not contain a comma.
"""
import logging

from sqlalchemy.exc import SQLAlchemyError

from hotspot import db
from hotspot.errors import InvalidPlanError, VoucherImportError
from hotspot.models.plan import get_plan
from hotspot.models.voucher import Voucher

log = logging.getLogger(__name__)

USERNAME_COLUMN = 'username'


def _split_row(line):
    return [cell.strip().replace('"', '') for cell in line.split(',')]


def parse_voucher_codes(csv_text):
    """Return the non-empty ``Username`` values of ``csv_text``, in file order."""
    lines = [line for line in (csv_text or '').split('\n') if line.strip()]
    if len(lines) < 2:
        raise VoucherImportError('The CSV file is empty or missing headers.')

    headers = _split_row(lines[0])
    try:
        username_index = [h.lower() for h in headers].index(USERNAME_COLUMN)
    except ValueError:
        raise VoucherImportError("CSV must contain a 'Username' column.") from None

    codes = []
    for line in lines[1:]:
        cells = _split_row(line)
        if len(cells) > username_index and cells[username_index]:
            codes.append(cells[username_index])

    if not codes:
        raise VoucherImportError("No voucher codes found in the 'Username' column of the file.")
    return codes


def import_vouchers(plan_id, csv_text):
    """Insert one unused voucher per username for ``plan_id``; all or nothing."""
    plan = get_plan(plan_id)
    if plan is None:
        raise InvalidPlanError(plan_id)

    codes = parse_voucher_codes(csv_text)
    try:
        db.session.add_all([Voucher(code=code, plan_id=plan.id, is_used=False) for code in codes])
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        log.exception("Voucher import for plan %s failed", plan.id)
        raise

    log.info("Imported %d vouchers into %s", len(codes), plan.name)
    return len(codes)
