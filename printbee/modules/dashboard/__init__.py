"""
Dashboard Module
================

Admin REST surface of the proxy.

Provides:
- Admin login (password check against the shared secret)
- Order listing and dashboard statistics
- Manual order creation
- Price / job status updates

Every route except login requires the shared secret in the x-admin-pwd header.
"""

from flask import Blueprint

# Blueprint name is 'admin' to match the /admin prefix it serves
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin'
)

from . import routes

__all__ = ['dashboard_bp']
