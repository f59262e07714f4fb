"""
Admin Auth
==========

Shared-secret check for admin routes. The client sends the admin password
itself as a bearer value in the x-admin-pwd header; there are no tokens.
"""

import hmac
from functools import wraps

from flask import request, jsonify

from printbee.core import get_config_value, logger as db_logger

ADMIN_HEADER = 'x-admin-pwd'


def password_matches(candidate):
    """True when candidate equals the configured ADMIN_PASSWORD"""
    secret = get_config_value('ADMIN_PASSWORD')
    if not secret or not candidate or not isinstance(candidate, str):
        return False
    return hmac.compare_digest(candidate.encode('utf-8'), str(secret).encode('utf-8'))


def unauthorized():
    return jsonify({'success': False, 'error': 'Unauthorized'}), 401


def admin_required(f):
    """Decorator to require the admin secret header; rejects before the view runs"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not password_matches(request.headers.get(ADMIN_HEADER)):
            db_logger.log_security_event('Rejected admin request', {
                'path': request.path,
                'header_present': ADMIN_HEADER in request.headers,
            })
            return unauthorized()
        return f(*args, **kwargs)
    return decorated_function
