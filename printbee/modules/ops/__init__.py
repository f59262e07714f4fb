"""
Ops Module
==========

Keeps the deployment warm and reports whether it is.

Features:
- Public /render-status endpoint (no auth) describing the keep-alive window
- Background keep-alive loop pinging the store during the daily window

Usage:
    from printbee.modules.ops import ops_bp, KeepAlive

    app.register_blueprint(ops_bp)  # Registers /render-status
    KeepAlive(app).start()
"""

from flask import Blueprint

ops_bp = Blueprint('ops', __name__)

from . import routes
from .keepalive import KeepAlive, KeepAliveWindow, render_status

__all__ = ['ops_bp', 'KeepAlive', 'KeepAliveWindow', 'render_status']
