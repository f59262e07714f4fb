"""
Order Routes
============

Public order submission, forwarded to the store as a ``create`` action.
"""

import logging

from flask import request, jsonify

from printbee.core import logger as db_logger
from printbee.modules.store import store_service, StoreError
from . import orders_bp
from .models import ValidationError, validate_order_fields

logger = logging.getLogger(__name__)


def create_in_store(body, require_attachment=True):
    """
    Validate an order body, send it to the store and return the new order id.

    Raises:
        ValidationError: body rejected locally, nothing was sent
        StoreError: store unreachable, or it did not hand back an order id
    """
    validate_order_fields(body, require_attachment=require_attachment)

    data = store_service.create_order(body)
    order_id = data.get('orderId')
    if data.get('success') is False or order_id in (None, ''):
        raise StoreError(data.get('error') or 'Store did not return an order id', payload=data)
    return data


def create_order_response(body, require_attachment, failure_message):
    """Shared JSON handling for the public and admin create routes"""
    try:
        data = create_in_store(body, require_attachment=require_attachment)
    except ValidationError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except StoreError as e:
        logger.error(f"Create order error: {e}")
        db_logger.error('proxy', f"Create order failed: {e}")
        status = 502 if e.payload is not None else 500
        return jsonify({'success': False, 'error': failure_message}), status

    db_logger.info('proxy', f"Order {data['orderId']} created")
    return jsonify({**data, 'success': True})


@orders_bp.route('/order', methods=['POST'])
def submit_order():
    """Public order submission"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'success': False, 'error': 'JSON body required'}), 400

    return create_order_response(body, require_attachment=True, failure_message='Server error')
