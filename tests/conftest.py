"""
Shared fixtures: a fully initialised app with a patched store connection.
"""

import os
import shutil
import tempfile
from unittest.mock import MagicMock, patch

import pytest
from flask import Flask

from printbee import PrintBee
from printbee.modules.store import store_service

ADMIN_PASSWORD = 's3cret'
GAS_URL = 'https://script.example.com/macros/s/test/exec'


def make_response(data=None, status=200, malformed=False):
    """Stand-in for a requests.Response"""
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    if malformed:
        response.json.side_effect = ValueError('No JSON object could be decoded')
    else:
        response.json.return_value = data
    return response


@pytest.fixture
def fake_response():
    return make_response


@pytest.fixture
def tmp_log_dir():
    """Temporary directory for the log database, cleaned up after."""
    d = tempfile.mkdtemp(prefix="printbee-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_log_dir):
    """Flask app with every Print Bee module registered."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["ADMIN_PASSWORD"] = ADMIN_PASSWORD
    app.config["GAS_URL"] = GAS_URL
    app.config["LOG_DB"] = os.path.join(tmp_log_dir, "app_logs.db")
    app.config["PRINTBEE_API_URL"] = "http://proxy.test"
    PrintBee(app)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store_http():
    """The store's requests session, replaced by a mock"""
    with patch.object(store_service, 'session') as session:
        yield session


@pytest.fixture
def admin_headers():
    return {'x-admin-pwd': ADMIN_PASSWORD}
