"""
Print Bee Client
================

Everything that runs on the caller's side of the proxy: the REST client,
order submission building, dashboard state and analytics aggregation.

Usage:
    from printbee.client import PrintBeeClient, build_submission, Attachment

    client = PrintBeeClient('https://printbee.example.com')
    body = build_submission(fields, [Attachment.from_path('poster.pdf')])
    order_id = client.submit_order(body)

    credential = client.login('secret')
    orders = client.get_orders(credential)
"""

from .api import PrintBeeClient, AdminCredential, ClientError
from .forms import Attachment, build_submission, MAX_FILE_SIZE
from .dashboard import DashboardState, filter_orders, download_order_files
from .analytics import summarize, chart_data

__all__ = [
    'PrintBeeClient', 'AdminCredential', 'ClientError',
    'Attachment', 'build_submission', 'MAX_FILE_SIZE',
    'DashboardState', 'filter_orders', 'download_order_files',
    'summarize', 'chart_data',
]
