"""
Analytics Module
================

Admin pass-through of the store's ``getAnalytics`` action. The dashboard's
charts are aggregated client-side (see printbee.client.analytics).
"""

from flask import Blueprint

analytics_bp = Blueprint(
    'analytics',
    __name__,
    url_prefix='/admin/analytics'
)

from . import routes

__all__ = ['analytics_bp']
