from flask import jsonify

from . import ops_bp
from .keepalive import render_status


@ops_bp.route('/render-status')
def status():
    """Public, no auth"""
    return jsonify(render_status())
