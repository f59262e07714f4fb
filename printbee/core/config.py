import os
from dotenv import load_dotenv

load_dotenv(override=True)


def _optional_float(value):
    if value in (None, ''):
        return None
    return float(value)


class Config:
    """
    Base configuration for Print Bee.
    Deployments provide the admin secret and store URL via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    BRAND_NAME = os.getenv('BRAND_NAME', 'Print Bee')

    # Shared admin secret, sent by admin clients in the x-admin-pwd header
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD')

    # External store (Google Apps Script web app)
    GAS_URL = os.getenv('GAS_URL')
    # None means requests waits for the store indefinitely
    STORE_TIMEOUT = _optional_float(os.getenv('STORE_TIMEOUT'))

    # Base URL of the proxy, used by the web portal. Empty means "same host".
    PRINTBEE_API_URL = os.getenv('PRINTBEE_API_URL', '')

    # Inlined base64 file content travels in JSON bodies
    MAX_CONTENT_LENGTH = 110 * 1024 * 1024

    # Application logs
    LOG_DIR = os.getenv('LOG_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(LOG_DIR, 'app_logs.db'))

    # Keep-alive loop
    KEEPALIVE_START_HOUR = int(os.getenv('KEEPALIVE_START_HOUR', '8'))
    KEEPALIVE_END_HOUR = int(os.getenv('KEEPALIVE_END_HOUR', '22'))
    KEEPALIVE_INTERVAL = int(os.getenv('KEEPALIVE_INTERVAL', '600'))
    KEEPALIVE_TIMEZONE = os.getenv('KEEPALIVE_TIMEZONE', 'Asia/Kolkata')

    # Port for local server
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None and val != '':
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None and val != '':
        return val
    return os.getenv(key, default)
