"""
Receipt/Payment Service
=======================

Loads the order summary shown in the receipt dialog and performs the single
mark-as-paid mutation. Outcomes are returned as ActionResult values so the
templates never have to guess success from the message text.
"""

import logging
from dataclasses import dataclass

from ..orders.models import OrderDetails
from ...core.api_client import get_api_client
from ...core.errors import MissingCredentialsError, OrdersAPIError
from ...core.logging_service import LoggingService

logger = logging.getLogger(__name__)

SUCCESS = 'success'
FAILURE = 'failure'

AUTH_MISSING_MESSAGE = 'Authentication token not found.'
LOAD_FAILED_MESSAGE = 'Failed to load order details.'
ALREADY_PAID_MESSAGE = 'Order is already marked as paid.'
MISSING_ORDER_MESSAGE = 'No order selected.'
UPLOAD_SUCCESS_MESSAGE = 'Receipt uploaded successfully!'
MARK_PAID_SUCCESS_MESSAGE = 'Order marked as paid successfully!'


@dataclass(frozen=True)
class ActionResult:
    kind: str
    text: str

    @classmethod
    def success(cls, text):
        return cls(SUCCESS, text)

    @classmethod
    def failure(cls, text):
        return cls(FAILURE, text)

    @property
    def is_success(self):
        return self.kind == SUCCESS

    def to_dict(self):
        return {'success': self.is_success, 'message': self.text}


def selected_receipt(files):
    """The uploaded receipt, or None when the file field was left empty."""
    receipt = files.get('uploadReceipt')
    if receipt is None or not receipt.filename:
        return None
    return receipt


def can_submit(details):
    """The submit control is enabled only for orders not already paid."""
    return not (details is not None and details.is_paid)


def load_order_details(order_id, credentials):
    """
    Fetch the dialog's order summary.

    Returns:
        (OrderDetails or None, ActionResult failure or None)
    """
    if not order_id:
        return None, ActionResult.failure(MISSING_ORDER_MESSAGE)
    if not credentials:
        return None, ActionResult.failure(AUTH_MISSING_MESSAGE)

    try:
        data = get_api_client().get_order(order_id, credentials)
    except MissingCredentialsError:
        return None, ActionResult.failure(AUTH_MISSING_MESSAGE)
    except OrdersAPIError as e:
        logger.warning(f"Order {order_id} details unavailable: {e}")
        return None, ActionResult.failure(LOAD_FAILED_MESSAGE)

    return OrderDetails.from_api(data, order_id), None


def mark_as_paid(order_id, credentials, receipt=None, known_status=None):
    """
    Upload a receipt and/or mark an order as paid. Issues at most one request.

    Args:
        order_id: Remote order identifier
        credentials: result of get_credentials()
        receipt: Optional FileStorage (None sends the JSON-only variant)
        known_status: Payment status the dialog was showing, used as a UI-level guard

    Returns:
        ActionResult
    """
    if not order_id:
        return ActionResult.failure(MISSING_ORDER_MESSAGE)
    if not credentials:
        return ActionResult.failure(AUTH_MISSING_MESSAGE)
    if known_status == 'Paid':
        return ActionResult.failure(ALREADY_PAID_MESSAGE)

    try:
        get_api_client().update_payment_fields(order_id, credentials, receipt=receipt)
    except MissingCredentialsError:
        return ActionResult.failure(AUTH_MISSING_MESSAGE)
    except OrdersAPIError as e:
        LoggingService.warning('payments', f"Mark-as-paid failed for order {order_id}", {
            'message': e.message, 'status_code': e.status_code, 'with_receipt': receipt is not None
        })
        return ActionResult.failure(e.message)

    LoggingService.log_user_action('payments', 'mark_paid', details={
        'order_id': order_id,
        'receipt': receipt.filename if receipt is not None else None,
    })
    if receipt is not None:
        return ActionResult.success(UPLOAD_SUCCESS_MESSAGE)
    return ActionResult.success(MARK_PAID_SUCCESS_MESSAGE)
