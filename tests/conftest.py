"""
Shared fixtures for DeliveryDesk tests.

The order-management API is never contacted: tests swap the registered
client's requests.Session for a MagicMock and inspect the calls it records.
"""

import os
import shutil
import tempfile
from unittest.mock import MagicMock

import pytest
from flask import Flask

from deliverydesk import DeliveryDesk
from deliverydesk.core.config import Config

API_URL = "https://orders.example.test"


def make_response(status_code=200, json_body=None, raise_json=False):
    """Build a stand-in for requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    if raise_json:
        response.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        response.json.return_value = json_body
    return response


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for the log database, cleaned up after."""
    d = tempfile.mkdtemp(prefix="deliverydesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture(autouse=True)
def isolated_log_db(tmp_db_dir, monkeypatch):
    """Keep LoggingService writes out of the working directory."""
    monkeypatch.setattr(Config, "LOG_DB", os.path.join(tmp_db_dir, "fallback_logs.db"))


@pytest.fixture
def app(tmp_db_dir):
    """Flask app with DeliveryDesk registered against a fake API origin."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["LOG_DB"] = os.path.join(tmp_db_dir, "app_logs.db")
    app.config["RECEIPT_SUCCESS_DELAY"] = 1.5
    DeliveryDesk(app, {"orders_api_url": API_URL})
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def api_session(app):
    """The mocked requests.Session used by the registered API client."""
    session = MagicMock()
    app.extensions["deliverydesk"].api_client.session = session
    return session


@pytest.fixture
def admin_client(client):
    """Test client signed in as an admin with a bearer token stored."""
    with client.session_transaction() as sess:
        sess["admin_id"] = "tester"
        sess["authToken"] = "secret-token"
    return client


@pytest.fixture
def admin_client_without_token(client):
    """Signed-in admin whose session holds no bearer token."""
    with client.session_transaction() as sess:
        sess["admin_id"] = "tester"
    return client


def sample_orders():
    return [
        {
            "_id": "a1",
            "orderNo": "ORD-100",
            "centreId": {"name": "North Hub", "centreId": "NH1"},
            "products": [{"quantity": 2, "product": {"name": "Widget"}}],
            "totalAmount": 250.5,
            "status": "Delivered",
            "paymentStatus": "Paid",
            "createdAt": "2026-10-19T09:30:00",
        },
        {
            "_id": "b2",
            "orderNo": "ORD-200",
            "centreId": {"name": "South Depot", "centreId": "SD7"},
            "products": [
                {"quantity": 1, "product": {"name": "Gadget"}},
                {"quantity": 5, "product": {"name": "Sprocket"}},
            ],
            "totalAmount": 99,
            "status": "Delivered",
            "paymentStatus": "Pending",
            "createdAt": "2026-10-10T15:00:00",
        },
        {
            "_id": "c3",
            "orderNo": "ORD-300",
            "centreId": {"name": "East Yard", "centreId": "EY2"},
            "products": [],
            "totalAmount": 10,
            "status": "Delivered",
            "createdAt": "2026-08-01T08:00:00",
        },
    ]


@pytest.fixture
def respond():
    """Factory for fake API responses."""
    return make_response


@pytest.fixture
def orders_payload():
    return sample_orders()
