"""
Dashboard State
===============

Client-side state of the admin dashboard: stats, the order list, local
price/status edits waiting to be saved, and search/status filtering.
"""

import logging
import webbrowser

from printbee.modules.orders.models import (
    JOB_STATUSES, DEFAULT_JOB_STATUS, ValidationError,
    validate_job_status, validate_price, validate_order_fields, file_references
)

logger = logging.getLogger(__name__)

ALL_STATUSES = 'All'
STAT_FIELDS = ('totalOrders', 'todayOrders', 'totalRevenue', 'todayRevenue')


def _number(value):
    try:
        number = float(value or 0)
    except (TypeError, ValueError):
        return 0
    return int(number) if number.is_integer() else number


def _matches_search(order, term):
    if not term:
        return True
    for key in ('name', 'email', 'phone'):
        value = order.get(key)
        if value is not None and term in str(value).lower():
            return True
    return False


def filter_orders(orders, search='', status=ALL_STATUSES):
    """
    Orders whose name, email or phone contains ``search`` (case-insensitive)
    and whose job status equals ``status`` unless it is "All". Order is kept.
    """
    term = (search or '').lower()
    status = status or ALL_STATUSES
    return [
        o for o in orders
        if _matches_search(o, term) and (status == ALL_STATUSES or o.get('jobStatus') == status)
    ]


def download_order_files(order, open_tab=webbrowser.open_new_tab):
    """Open every file of an order in its own browser tab"""
    files = file_references(order)
    if not files:
        raise ValidationError('No file available for this order.')
    for url in files:
        open_tab(url)
    return files


class DashboardState:
    """
    Orders and stats for one admin, with edits held locally until saved.

    Args:
        client (PrintBeeClient): proxy client
        credential (AdminCredential): sent with every call
    """

    def __init__(self, client, credential):
        self.client = client
        self.credential = credential
        self.stats = {field: 0 for field in STAT_FIELDS}
        self.orders = []

    def load(self):
        """Replace stats and orders with the server's (orders arrive newest first)"""
        data = self.client.get_dashboard(self.credential)
        stats = data.get('stats') or {}
        self.stats = {field: _number(stats.get(field)) for field in STAT_FIELDS}
        self.orders = [dict(o) for o in data.get('orders', [])]
        return self

    def find(self, order_id):
        for order in self.orders:
            if str(order.get('orderId')) == str(order_id):
                return order
        raise KeyError(order_id)

    def set_price(self, order_id, value):
        """Local edit only; validated on save"""
        order = self.find(order_id)
        if isinstance(value, str):
            value = value.strip()
        order['price'] = value
        return order

    def set_status(self, order_id, value):
        """Local edit only. Values outside the three job statuses are ignored."""
        if value not in JOB_STATUSES:
            return False
        self.find(order_id)['jobStatus'] = value
        return True

    def save(self, order_id):
        """Validate the local edits, send them, then reload the full list"""
        order = self.find(order_id)
        price = validate_price(order.get('price'))
        job_status = validate_job_status(order.get('jobStatus') or DEFAULT_JOB_STATUS)

        self.client.update_order(self.credential, order['orderId'], job_status, price)
        logger.info(f"Order {order['orderId']} saved: {job_status}, {price}")
        return self.load()

    def create(self, fields):
        """Create a manual order and put it at the top of the local list"""
        fields = {k: v for k, v in fields.items() if v not in (None, '')}
        validate_order_fields(fields, require_attachment=False)

        order_id = self.client.create_order(self.credential, fields)
        order = dict(fields, orderId=order_id, jobStatus=DEFAULT_JOB_STATUS)
        order.setdefault('files', file_references(fields))
        self.orders.insert(0, order)
        return order_id

    def visible_orders(self, search='', status=ALL_STATUSES):
        return filter_orders(self.orders, search, status)
