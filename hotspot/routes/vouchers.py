from flask import Blueprint, request, jsonify
from hotspot.models.base import isoformat_utc
from hotspot.services.vouchers import get_active_vouchers_for_phone, purchase_voucher

vouchers_bp = Blueprint('vouchers', __name__)

# largest id a 32-bit INTEGER primary key holds
MAX_VOUCHER_ID = 2 ** 31 - 1

def parse_voucher_id(value):
    """Return ``value`` as a voucher id, or None unless it is a whole number in range."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        digits = value.strip()
        if not (digits.isascii() and digits.isdigit() and len(digits) <= 10):
            return None
        value = int(digits)
    if not isinstance(value, int) or not 1 <= value <= MAX_VOUCHER_ID:
        return None
    return value

@vouchers_bp.route('/active', methods=['POST'])
def active_vouchers():
    """Return the caller's unexpired vouchers and text them to the phone"""
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'msg': 'Request body must be a JSON object'}), 400

    phone_number = str(data.get('phone_number') or '').strip()
    if not phone_number:
        return jsonify({'msg': 'phone_number is required'}), 400

    lookup = get_active_vouchers_for_phone(phone_number)
    if lookup is None:
        return jsonify({'msg': 'No active vouchers found'}), 404

    return jsonify({
        'vouchers': [
            {
                'code': v.code,
                'plan_name': v.plan_name,
                'expires_at': isoformat_utc(v.expires_at),
            }
            for v in lookup.vouchers
        ],
        'sms_sent': lookup.sms_sent,
    }), 200

@vouchers_bp.route('/purchase', methods=['POST'])
def purchase():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'msg': 'Request body must be a JSON object'}), 400
    if 'voucher_id' not in data or not data.get('phone_number'):
        return jsonify({'msg': 'voucher_id and phone_number are required'}), 400

    voucher_id = parse_voucher_id(data['voucher_id'])
    if voucher_id is None:
        return jsonify({'msg': 'voucher_id must be a positive integer'}), 400

    result = purchase_voucher(voucher_id, str(data['phone_number']).strip())
    if not result.ok:
        return jsonify({'msg': 'Voucher unavailable, please try another voucher'}), 409

    return jsonify({
        'voucher': result.voucher.to_dict(),
        'purchase': result.purchase.to_dict(),
        'sms_sent': result.sms_sent,
    }), 201
