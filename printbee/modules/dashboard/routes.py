"""
Admin Dashboard Routes
======================

Admin endpoints of the proxy. Each one maps an inbound request to one or two
store calls and reshapes the answer for the dashboard.
"""

import logging

from flask import request, jsonify

from printbee.core import logger as db_logger
from printbee.modules.orders.models import (
    ValidationError, validate_job_status, validate_price, normalize_order, newest_first
)
from printbee.modules.orders.routes import create_order_response
from printbee.modules.store import store_service, StoreError
from . import dashboard_bp
from .auth import admin_required, password_matches, unauthorized

logger = logging.getLogger(__name__)

STAT_FIELDS = ('totalOrders', 'todayOrders', 'totalRevenue', 'todayRevenue')


def _presentable_orders(raw_orders):
    """Normalized orders, newest first"""
    return newest_first([normalize_order(o) for o in raw_orders if isinstance(o, dict)])


def _extract_stats(stats_data):
    """Use the store's stats object when present, else its top-level fields"""
    stats = stats_data.get('stats')
    if isinstance(stats, dict):
        return stats
    return {field: stats_data.get(field) or 0 for field in STAT_FIELDS}


@dashboard_bp.route('/login', methods=['POST'])
def login():
    """Check a password against the shared secret. No session is created."""
    data = request.get_json(silent=True)
    if isinstance(data, dict) and password_matches(data.get('password')):
        db_logger.info('proxy', 'Admin login succeeded')
        return jsonify({'success': True})

    db_logger.log_security_event('Admin login failed')
    return unauthorized()


@dashboard_bp.route('/orders')
@admin_required
def orders():
    """List all orders"""
    try:
        raw_orders = store_service.get_orders()
    except StoreError as e:
        logger.error(f"Orders fetch error: {e}")
        db_logger.error('proxy', f"Orders fetch failed: {e}")
        return jsonify({'success': False, 'error': str(e)}), 500

    return jsonify({'success': True, 'orders': _presentable_orders(raw_orders)})


@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Stats plus the full order list, newest first"""
    try:
        stats_data = store_service.get_dashboard_stats()
        raw_orders = store_service.get_orders()
    except StoreError as e:
        logger.error(f"Dashboard error: {e}")
        db_logger.error('proxy', f"Dashboard load failed: {e}")
        return jsonify({'success': False, 'error': 'Failed to load dashboard'}), 500

    return jsonify({
        'success': True,
        'stats': _extract_stats(stats_data),
        'orders': _presentable_orders(raw_orders),
    })


@dashboard_bp.route('/create-order', methods=['POST'])
@admin_required
def create_order():
    """Manual order entered by an admin; files are optional"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'success': False, 'error': 'JSON body required'}), 400

    return create_order_response(body, require_attachment=False,
                                 failure_message='Failed to create order')


@dashboard_bp.route('/update-order', methods=['POST'])
@admin_required
def update_order():
    """Overwrite an order's job status and price (last write wins)"""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'JSON body required'}), 400

    order_id = data.get('orderId')

    if order_id in (None, ''):
        return jsonify({'success': False, 'error': 'Order ID required'}), 400

    try:
        job_status = validate_job_status(data.get('jobStatus'))
        price = validate_price(data.get('price'))
    except ValidationError as e:
        return jsonify({'success': False, 'error': str(e)}), 400

    try:
        result = store_service.update_order(order_id, job_status, price)
    except StoreError as e:
        logger.error(f"Update order error: {e}")
        db_logger.error('proxy', f"Update of order {order_id} failed: {e}")
        if e.status_code is not None:
            return jsonify({'success': False, 'error': str(e) or 'GAS update failed'}), 400
        return jsonify({'success': False, 'error': 'Server error while updating order'}), 500

    if not result.get('success'):
        return jsonify({'success': False, 'error': result.get('error') or 'GAS update failed'}), 400

    db_logger.info('proxy', f"Order {order_id} updated", {'jobStatus': job_status, 'price': price})
    return jsonify({'success': True, 'message': 'Order updated successfully'})
