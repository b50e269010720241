"""
Receipt Dialog Routes
=====================

The dialog is opened by navigating to its URL from the delivered orders list
and closed by returning there with the same filter query. On success it shows
its message, then returns to the list after RECEIPT_SUCCESS_DELAY seconds so
the list re-fetches fresh data without losing its filters.
"""

from flask import render_template, request, jsonify, url_for
from . import payments_bp
from .service import (
    load_order_details, mark_as_paid, selected_receipt, can_submit, AUTH_MISSING_MESSAGE,
)
from ..dashboard.utils import admin_required, api_admin_required
from ..orders.filters import FilterCriteria
from ...core.config import get_config_value
from ...core.credentials import get_credentials


def _return_url(criteria):
    return url_for('delivered_orders.delivered_orders', **criteria.to_query())


def _render_dialog(order_id, criteria, details=None, result=None, closing=False):
    return render_template(
        'payments/receipt_dialog.html',
        order_id=order_id,
        details=details,
        result=result,
        criteria=criteria,
        closing=closing,
        submit_enabled=not closing and can_submit(details),
        return_url=_return_url(criteria),
        close_delay=float(get_config_value('RECEIPT_SUCCESS_DELAY', 1.5)),
    )


@payments_bp.route('/<order_id>/receipt', methods=['GET'])
@admin_required
def receipt_dialog(order_id):
    """Open the receipt dialog and load the order summary"""
    criteria = FilterCriteria.from_args(request.args)
    details, load_result = load_order_details(order_id, get_credentials())
    return _render_dialog(order_id, criteria, details=details, result=load_result)


@payments_bp.route('/<order_id>/receipt', methods=['POST'])
@admin_required
def handle_mark_as_paid(order_id):
    """Upload the selected receipt (if any) and mark the order as paid"""
    criteria = FilterCriteria.from_args(request.form)
    credentials = get_credentials()

    result = mark_as_paid(
        order_id,
        credentials,
        receipt=selected_receipt(request.files),
        known_status=request.form.get('payment_status') or None,
    )

    if result.is_success:
        return _render_dialog(order_id, criteria, result=result, closing=True)

    # Show the summary again; its own load failure must not hide the submit failure
    details, _ = load_order_details(order_id, credentials)
    return _render_dialog(order_id, criteria, details=details, result=result)


@payments_bp.route('/api/order/<order_id>')
@api_admin_required
def api_order_details(order_id):
    """Order summary as JSON"""
    credentials = get_credentials()
    if not credentials:
        return jsonify({'success': False, 'error': AUTH_MISSING_MESSAGE}), 401

    details, failure = load_order_details(order_id, credentials)
    if failure is not None:
        return jsonify({'success': False, 'error': failure.text}), 502

    return jsonify({'success': True, 'order': details.to_dict()})


@payments_bp.route('/api/order/<order_id>/mark-paid', methods=['POST'])
@api_admin_required
def api_mark_as_paid(order_id):
    """Mark an order as paid; multipart with uploadReceipt attaches a receipt"""
    credentials = get_credentials()
    if not credentials:
        return jsonify({'success': False, 'message': AUTH_MISSING_MESSAGE}), 401

    result = mark_as_paid(order_id, credentials, receipt=selected_receipt(request.files))
    if result.is_success:
        return jsonify(result.to_dict())
    return jsonify(result.to_dict()), 502
