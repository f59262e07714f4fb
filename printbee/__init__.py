"""
Print Bee - Print Order Intake
==============================

A Flask application for a print shop:
- Public order submission (files inlined as base64, or a link)
- Admin REST proxy in front of a spreadsheet-backed Apps Script store
- Admin dashboard and analytics pages
- Keep-alive loop that stops the deployment idling during opening hours

Usage:
    from flask import Flask
    from printbee import PrintBee

    app = Flask(__name__)
    printbee = PrintBee(app)

    # or only the proxy, e.g. when the portal is hosted elsewhere
    PrintBee(app, {'features': {'portal': False}})
"""

import logging
import secrets

from flask import jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from .core import Config, get_config_value, logger as db_logger

__version__ = '0.1.0'
__author__ = 'Print Bee Team'

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'orders': True,
    'dashboard': True,
    'analytics': True,
    'ops': True,
    'portal': True,
    'keepalive': True,
}


class PrintBee:
    """Flask extension registering the Print Bee modules on an app"""

    def __init__(self, app=None, config=None):
        self._config = {}
        self._registered = []
        self.keepalive = None
        if app is not None:
            self.init_app(app, config)

    def init_app(self, app, config=None):
        config = config or {}
        features = dict(DEFAULT_FEATURES)
        features.update(config.get('features', {}))
        self._config = {
            'features': features,
            'brand_name': config.get('brand_name') or get_config_value('BRAND_NAME', 'Print Bee'),
        }

        self._apply_app_config(app)
        CORS(app, origins='*', methods=['GET', 'POST', 'OPTIONS'],
             allow_headers=['Content-Type', 'x-admin-pwd'], send_wildcard=True)
        self._register_modules(app)
        self._register_error_handlers(app)

        @app.context_processor
        def inject_printbee():
            return {
                'printbee_config': self._config,
                'brand_name': self._config['brand_name'],
            }

        if features['keepalive']:
            self._setup_keepalive(app)

        app.extensions['printbee'] = self
        return self

    def _apply_app_config(self, app):
        # Flask ships these keys set to None, so only fill them when still unset
        for key in ('MAX_CONTENT_LENGTH', 'ADMIN_PASSWORD', 'GAS_URL', 'STORE_TIMEOUT',
                    'PRINTBEE_API_URL', 'LOG_DB'):
            if app.config.get(key) is None and getattr(Config, key, None) is not None:
                app.config[key] = getattr(Config, key)

        if not app.config.get('SECRET_KEY'):
            if Config.SECRET_KEY:
                app.config['SECRET_KEY'] = Config.SECRET_KEY
            else:
                # Sessions (portal login) need a key; a random one logs admins out on restart
                logger.warning("FLASK_SECRET_KEY not set, using a random session key")
                app.config['SECRET_KEY'] = secrets.token_hex(32)

        app.config['SESSION_COOKIE_HTTPONLY'] = True
        if app.config.get('SESSION_COOKIE_SAMESITE') is None:
            app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

    def _register_modules(self, app):
        features = self._config['features']

        if features['orders']:
            from .modules.orders import orders_bp
            app.register_blueprint(orders_bp)
            self._registered.append('orders')

        if features['dashboard']:
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features['analytics']:
            from .modules.analytics import analytics_bp
            app.register_blueprint(analytics_bp)
            self._registered.append('analytics')

        if features['ops']:
            from .modules.ops import ops_bp
            app.register_blueprint(ops_bp)
            self._registered.append('ops')

        if features['portal']:
            from .modules.portal import portal_bp
            app.register_blueprint(portal_bp)
            self._registered.append('portal')

    def _register_error_handlers(self, app):
        @app.errorhandler(413)
        def payload_too_large(e):
            limit_mb = (app.config.get('MAX_CONTENT_LENGTH') or 0) // (1024 * 1024)
            return jsonify({
                'success': False,
                'error': f'Request too large (limit {limit_mb} MB). Please submit a link instead.'
            }), 413

        @app.errorhandler(404)
        def not_found(e):
            return jsonify({'success': False, 'error': 'Not found'}), 404

        @app.errorhandler(405)
        def method_not_allowed(e):
            return jsonify({'success': False, 'error': 'Method not allowed'}), 405

        @app.errorhandler(Exception)
        def unhandled(e):
            if isinstance(e, HTTPException):
                return jsonify({'success': False, 'error': e.description}), e.code
            db_logger.log_error_with_traceback('app', e, {'path': request.path})
            return jsonify({'success': False, 'error': 'Server error'}), 500

    def _setup_keepalive(self, app):
        """Start the keep-alive thread unless testing or no store is configured"""
        if app.testing or app.config.get('TESTING'):
            return
        if not get_config_value('GAS_URL'):
            logger.info("GAS_URL not set, keep-alive disabled")
            return

        from .modules.ops import KeepAlive
        self.keepalive = KeepAlive(app)
        self.keepalive.start()

    def get_registered_modules(self):
        return list(self._registered)

    @property
    def config(self):
        return self._config


__all__ = ['PrintBee', '__version__']
