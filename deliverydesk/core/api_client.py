"""
Order-Management API Client
===========================

Thin requests-based client for the remote order-management API. All
persistence and payment authority live on the remote side; this module only
issues the calls and normalises the response shapes it gets back.

The list endpoint answers either with a bare array or with {"orders": [...]},
and the detail endpoint with either a bare object or {"order": {...}}. Both
shapes are accepted here so that views only ever see one.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .errors import MissingCredentialsError, OrdersAPIError
from .logging_service import LoggingService

logger = logging.getLogger(__name__)

PAID = 'Paid'
DELIVERED = 'Delivered'


def normalize_order_list(data: Any) -> List[Dict[str, Any]]:
    """
    Normalise the list endpoint's payload to a list of order dicts.

    A JSON array is returned as-is, an object wrapping the array under
    "orders" is unwrapped, and anything else becomes an empty list.
    """
    if isinstance(data, list):
        orders = data
    elif isinstance(data, dict) and isinstance(data.get('orders'), list):
        orders = data['orders']
    else:
        return []
    return [o for o in orders if isinstance(o, dict)]


def normalize_order_detail(data: Any) -> Dict[str, Any]:
    """Unwrap {"order": {...}} or accept a bare order object."""
    if isinstance(data, dict):
        inner = data.get('order')
        if isinstance(inner, dict):
            return inner
        return data
    return {}


def extract_error_message(response, fallback: str) -> str:
    """Return the server-supplied "message" field, or fallback when there is none."""
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        message = body.get('message')
        if isinstance(message, str) and message.strip():
            return message
    return fallback


def _path_id(order_id) -> str:
    """Percent-encode an order id for use as a single URL path segment."""
    return quote(str(order_id), safe='')


class OrdersAPIClient:
    """Client for the order-management REST API."""

    def __init__(self, base_url: str, timeout: float = 30):
        self.base_url = (base_url or '').rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/api/{path.lstrip('/')}"

    def _request(self, method: str, path: str, fallback: str,
                 headers: Optional[Dict[str, str]] = None, **kwargs) -> requests.Response:
        """Send one request; raise OrdersAPIError on transport failure or non-2xx."""
        url = self._url(path)
        try:
            response = self.session.request(method, url, headers=headers,
                                            timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Order API {method} {path} failed: {e}")
            LoggingService.log_api_call('orders_api', path, method, None, {'error': str(e)})
            raise OrdersAPIError(fallback) from e

        LoggingService.log_api_call('orders_api', path, method, response.status_code)

        if not response.ok:
            raise OrdersAPIError(extract_error_message(response, fallback), response.status_code)
        return response

    def list_orders_by_status(self, status: str = DELIVERED) -> List[Dict[str, Any]]:
        """
        Fetch every order in a fulfillment status. Unauthenticated.

        Returns:
            List of order dicts (possibly empty when the payload shape is unexpected)

        Raises:
            OrdersAPIError: on transport failure, non-2xx status or undecodable body
        """
        logger.info(f"Fetching {status} orders...")
        response = self._request('GET', f"orders/status/{status}",
                                 f"Failed to fetch {status.lower()} orders")
        try:
            data = response.json()
        except ValueError as e:
            raise OrdersAPIError(f"Failed to fetch {status.lower()} orders",
                                 response.status_code) from e

        orders = normalize_order_list(data)
        logger.info(f"Retrieved {len(orders)} orders")
        return orders

    def get_order(self, order_id: str, credentials) -> Dict[str, Any]:
        """Fetch a single order with the session's bearer token."""
        if not credentials:
            raise MissingCredentialsError()

        # Non-2xx bodies are not surfaced for the detail fetch
        try:
            response = self._request('GET', f"orders/{_path_id(order_id)}", 'Failed to load order details.',
                                     headers=credentials.auth_header())
        except OrdersAPIError as e:
            raise OrdersAPIError('Failed to load order details.', e.status_code) from e

        try:
            data = response.json()
        except ValueError as e:
            raise OrdersAPIError('Failed to load order details.', response.status_code) from e
        return normalize_order_detail(data)

    def update_payment_fields(self, order_id: str, credentials, receipt=None) -> None:
        """
        Mark an order as paid, attaching a receipt file when one is given.

        Exactly one PUT is issued: multipart (uploadReceipt + paymentStatus)
        with a receipt, JSON {"paymentStatus": "Paid"} without.

        Args:
            order_id: Remote order identifier
            credentials: SessionCredentials (falsy credentials abort before any request)
            receipt: Optional werkzeug FileStorage

        Raises:
            MissingCredentialsError: no token in session
            OrdersAPIError: with the server's message field when it sent one
        """
        if not credentials:
            raise MissingCredentialsError()

        path = f"orders/{_path_id(order_id)}/payment-fields"
        headers = credentials.auth_header()

        if receipt is not None:
            files = {
                'uploadReceipt': (receipt.filename, receipt.stream,
                                  receipt.mimetype or 'application/octet-stream')
            }
            self._request('PUT', path, 'Upload failed', headers=headers,
                          files=files, data={'paymentStatus': PAID})
        else:
            self._request('PUT', path, 'Failed to mark order as paid', headers=headers,
                          json={'paymentStatus': PAID})

        logger.info(f"Order {order_id} marked as paid (receipt={'yes' if receipt else 'no'})")


def get_api_client():
    """Return the client registered on the current app."""
    from flask import current_app
    return current_app.extensions['deliverydesk'].api_client
