import logging

from flask import Blueprint, jsonify, request
from flask_jwt_extended import create_access_token, get_jwt, jwt_required, current_user
from sqlalchemy.exc import SQLAlchemyError
from functools import wraps

from hotspot.errors import HotspotError
from hotspot.models.plan import list_plans
from hotspot.models.profile import Profile
from hotspot.models.token_blocklist import TokenBlocklist
from hotspot.services.voucher_import import import_vouchers
from hotspot.services.vouchers import get_voucher_inventory

log = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)

def admin_required(fn):
    @wraps(fn)
    @jwt_required()
    def wrapper(*args, **kwargs):
        if not isinstance(current_user, Profile):
            return jsonify({'msg': 'Admin access required'}), 403
        return fn(*args, **kwargs)
    return wrapper

@admin_bp.errorhandler(HotspotError)
def handle_hotspot_error(error):
    return jsonify(error.to_dict()), error.status_code

@admin_bp.errorhandler(SQLAlchemyError)
def handle_database_error(error):
    log.error("Database error: %s", error)
    return jsonify({'msg': 'Database error'}), 500

@admin_bp.route('/login', methods=['POST'])
def login():
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        return jsonify({'msg': 'Request body must be a JSON object'}), 400
    username = str(data.get('username') or '').strip()
    password = data.get('password') or ''
    if not username or not password:
        return jsonify({'msg': 'username and password are required'}), 400

    profile = Profile.authenticate(username, password)
    if not profile:
        # same answer whichever field was wrong
        log.info("Failed admin login for %r", username)
        return jsonify({'msg': 'Invalid credentials'}), 401

    token = create_access_token(identity=str(profile.id))
    return jsonify({'access_token': token, 'profile': profile.to_dict()}), 200

@admin_bp.route('/logout', methods=['POST'])
@admin_required
def logout():
    TokenBlocklist.revoke(get_jwt()['jti'])
    return jsonify({'msg': 'Logged out'}), 200

@admin_bp.route('/me', methods=['GET'])
@admin_required
def me():
    return jsonify(current_user.to_dict()), 200

@admin_bp.route('/vouchers', methods=['GET'])
@admin_required
def voucher_inventory():
    """All vouchers grouped by plan, with used/available counts"""
    grouped, stats = get_voucher_inventory()
    return jsonify({
        'plans': [plan.to_dict() for plan in list_plans()],
        'vouchers': {
            plan_id: [voucher.to_dict() for voucher in vouchers]
            for plan_id, vouchers in grouped.items()
        },
        'stats': stats,
    }), 200

@admin_bp.route('/vouchers/upload', methods=['POST'])
@admin_required
def upload_vouchers():
    plan_id = request.form.get('plan_id')
    upload = request.files.get('file')
    if not plan_id or upload is None:
        return jsonify({'msg': 'plan_id and file are required'}), 400

    try:
        text = upload.read().decode('utf-8-sig')
    except UnicodeDecodeError:
        return jsonify({'msg': 'Could not read the uploaded file.'}), 400

    inserted = import_vouchers(plan_id, text)
    return jsonify({'inserted': inserted, 'plan_id': plan_id}), 201
