"""
Print Bee API Client
====================

REST client for the proxy, used by the web portal and by scripts.
Admin calls take an explicit ``AdminCredential``; nothing is kept globally.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from printbee.modules.dashboard.auth import ADMIN_HEADER

logger = logging.getLogger(__name__)


class ClientError(Exception):
    """A proxy call failed: transport, HTTP status, malformed JSON or success:false."""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class AdminCredential:
    """The shared admin password, held by the caller and sent on each admin call."""

    def __init__(self, password: str):
        if not password:
            raise ValueError('Admin password required')
        self.password = password

    def headers(self) -> Dict[str, str]:
        return {ADMIN_HEADER: self.password}

    def __repr__(self):
        return 'AdminCredential(****)'


class PrintBeeClient:
    """Thin wrapper over the proxy's REST surface"""

    def __init__(self, base_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, credential: AdminCredential = None,
                 payload: Dict[str, Any] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        headers = credential.headers() if credential else {}

        try:
            response = self.session.request(method, url, json=payload, headers=headers,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ClientError(f"Could not reach server: {e}")

        try:
            data = response.json()
        except ValueError:
            raise ClientError(f"HTTP {response.status_code}", status_code=response.status_code)

        if not isinstance(data, dict):
            raise ClientError('Unexpected response from server', status_code=response.status_code)

        if not response.ok or not data.get('success'):
            message = data.get('error') or f"HTTP {response.status_code}"
            raise ClientError(message, status_code=response.status_code)
        return data

    # ===== Public =====

    def submit_order(self, payload: Dict[str, Any]) -> str:
        """Send a built submission; returns the store-assigned order id"""
        data = self._request('POST', '/order', payload=payload)
        order_id = data.get('orderId')
        if not order_id:
            raise ClientError('Server did not return an order id')
        return str(order_id)

    def render_status(self) -> Dict[str, Any]:
        return self._request('GET', '/render-status')

    # ===== Admin =====

    def login(self, password: str) -> AdminCredential:
        """Check the password; the returned credential is the password itself"""
        self._request('POST', '/admin/login', payload={'password': password})
        return AdminCredential(password)

    def get_orders(self, credential: AdminCredential) -> List[Dict[str, Any]]:
        data = self._request('GET', '/admin/orders', credential=credential)
        orders = data.get('orders')
        return orders if isinstance(orders, list) else []

    def get_dashboard(self, credential: AdminCredential) -> Dict[str, Any]:
        """Returns {'stats': {...}, 'orders': [...]}, orders newest first"""
        data = self._request('GET', '/admin/dashboard', credential=credential)
        stats = data.get('stats') or {}
        orders = data.get('orders')
        return {
            'stats': stats,
            'orders': orders if isinstance(orders, list) else [],
        }

    def create_order(self, credential: AdminCredential, fields: Dict[str, Any]) -> str:
        data = self._request('POST', '/admin/create-order', credential=credential, payload=fields)
        order_id = data.get('orderId')
        if not order_id:
            raise ClientError('Server did not return an order id')
        return str(order_id)

    def update_order(self, credential: AdminCredential, order_id, job_status: str,
                     price: float) -> None:
        self._request('POST', '/admin/update-order', credential=credential, payload={
            'orderId': order_id,
            'jobStatus': job_status,
            'price': price,
        })
