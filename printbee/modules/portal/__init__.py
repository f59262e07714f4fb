"""
Portal Module
=============

Server-rendered web UI. Talks to the proxy only through PrintBeeClient,
exactly as a browser front end would.

Pages:
- /            public order form
- /admin       admin login (GET form, POST password)
- /dashboard   orders, stats, inline price/status edits, manual orders
- /analytics   monthly and payment-method charts
"""

import os

from flask import Blueprint

_template_dir = os.path.join(os.path.dirname(__file__), 'templates')

portal_bp = Blueprint('portal', __name__, template_folder=_template_dir)

from . import routes

__all__ = ['portal_bp']
