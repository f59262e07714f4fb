import logging

from flask import jsonify

from printbee.core import logger as db_logger
from printbee.modules.dashboard.auth import admin_required
from printbee.modules.store import store_service, StoreError
from . import analytics_bp

logger = logging.getLogger(__name__)


@analytics_bp.route('')
@admin_required
def analytics():
    """Whatever the store computes for getAnalytics, tagged with success"""
    try:
        data = store_service.get_analytics()
    except StoreError as e:
        logger.error(f"Analytics error: {e}")
        db_logger.error('proxy', f"Analytics fetch failed: {e}")
        return jsonify({'success': False, 'error': 'Server error'}), 500

    return jsonify({**data, 'success': True})
