from flask import Blueprint, jsonify
from hotspot.models.plan import get_plan, list_plans
from hotspot.services.vouchers import get_vouchers_for_plan

plans_bp = Blueprint('plans', __name__)

@plans_bp.route('', methods=['GET'])
def list_all_plans():
    """List the WIFI plans on offer"""
    return jsonify([plan.to_dict() for plan in list_plans()]), 200

@plans_bp.route('/<plan_id>', methods=['GET'])
def get_one_plan(plan_id):
    plan = get_plan(plan_id)
    if not plan:
        return jsonify({'msg': 'Plan not found'}), 404
    return jsonify(plan.to_dict()), 200

@plans_bp.route('/<plan_id>/vouchers', methods=['GET'])
def list_plan_vouchers(plan_id):
    """List unused vouchers of a plan; an empty list means none are available"""
    if not get_plan(plan_id):
        return jsonify({'msg': 'Plan not found'}), 404
    vouchers = get_vouchers_for_plan(plan_id)
    return jsonify([voucher.to_public_dict() for voucher in vouchers]), 200
