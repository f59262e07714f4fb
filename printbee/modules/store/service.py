"""
Script Store Service
====================

HTTP client for the spreadsheet-backed Apps Script endpoint that holds all
orders. Reads are GET requests selected with ``?action=``; writes are JSON
POST bodies carrying an ``action`` field.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from printbee.core import get_config_value, logger as db_logger

logger = logging.getLogger(__name__)

READ_ACTIONS = ('getOrders', 'getDashboardStats', 'getAnalytics', 'renderTask')
WRITE_ACTIONS = ('create', 'update')


class StoreError(Exception):
    """The store could not be reached or answered with something unusable."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class ScriptStoreService:
    """Store client: reads GAS_URL and STORE_TIMEOUT from config at call time."""

    def __init__(self, url: str = None, timeout: Optional[float] = None, session=None):
        self._url = url
        self._timeout = timeout
        self.session = session or requests.Session()

    @property
    def url(self) -> str:
        url = self._url or get_config_value('GAS_URL')
        if not url:
            raise StoreError('GAS_URL not configured')
        return url

    @property
    def timeout(self) -> Optional[float]:
        if self._timeout is not None:
            return self._timeout
        val = get_config_value('STORE_TIMEOUT')
        return float(val) if val not in (None, '') else None

    def _decode(self, response, action, method) -> Dict[str, Any]:
        db_logger.log_api_call('store', action, method, response.status_code)
        try:
            data = response.json()
        except ValueError:
            raise StoreError(f"Store returned malformed JSON for '{action}'",
                             status_code=response.status_code)

        if not isinstance(data, dict):
            raise StoreError(f"Store returned unexpected payload for '{action}'",
                             status_code=response.status_code, payload=data)

        if not response.ok:
            raise StoreError(data.get('error') or f"Store returned HTTP {response.status_code}",
                             status_code=response.status_code, payload=data)
        return data

    def get(self, action: str) -> Dict[str, Any]:
        """Run a read action"""
        if action not in READ_ACTIONS:
            raise ValueError(f"Unknown read action: {action}")
        try:
            response = self.session.get(self.url, params={'action': action}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Store GET {action} failed: {e}")
            raise StoreError(f"Could not reach store: {e}")
        return self._decode(response, action, 'GET')

    def post(self, action: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Run a write action; payload keys are sent alongside ``action``"""
        if action not in WRITE_ACTIONS:
            raise ValueError(f"Unknown write action: {action}")
        body = dict(payload)
        body['action'] = action
        try:
            response = self.session.post(self.url, json=body, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Store POST {action} failed: {e}")
            raise StoreError(f"Could not reach store: {e}")
        return self._decode(response, action, 'POST')

    # ===== Actions =====

    def create_order(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return self.post('create', fields)

    def update_order(self, order_id, job_status: str, price: float) -> Dict[str, Any]:
        return self.post('update', {'orderId': order_id, 'jobStatus': job_status, 'price': price})

    def get_orders(self) -> List[Dict[str, Any]]:
        data = self.get('getOrders')
        orders = data.get('orders')
        return orders if isinstance(orders, list) else []

    def get_dashboard_stats(self) -> Dict[str, Any]:
        return self.get('getDashboardStats')

    def get_analytics(self) -> Dict[str, Any]:
        return self.get('getAnalytics')

    def render_task(self) -> Dict[str, Any]:
        return self.get('renderTask')


# Module-level instance shared by the blueprints
store_service = ScriptStoreService()
