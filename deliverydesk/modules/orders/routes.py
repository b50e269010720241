"""
Delivered Orders Routes
=======================

The whole delivered-order set is fetched once per render and filtered in
memory. Filter criteria live in the query string.
"""

import logging
from urllib.parse import quote

from flask import render_template, request, jsonify, url_for
from . import orders_bp
from .filters import FilterCriteria, filter_orders, DATE_FILTERS, PAYMENT_FILTERS
from .models import Order
from ..dashboard.utils import admin_required, api_admin_required
from ...core.api_client import get_api_client, DELIVERED
from ...core.config import get_config_value
from ...core.errors import OrdersAPIError
from ...core.logging_service import db_log

logger = logging.getLogger(__name__)


def load_delivered_orders():
    """
    Fetch delivered orders from the API.

    Returns:
        (orders, load_failed) - orders is empty when the fetch failed
    """
    try:
        payload = get_api_client().list_orders_by_status(DELIVERED)
    except OrdersAPIError as e:
        logger.error(f"Failed to fetch delivered orders: {e}")
        db_log('error', 'orders', 'Failed to fetch delivered orders', {
            'error': e.message, 'status_code': e.status_code
        })
        return [], True

    return [Order.from_api(o) for o in payload], False


def invoice_url(order_id):
    template = get_config_value('ORDER_INVOICE_URL', '/authenticated/view-orders/{order_id}')
    return template.format(order_id=quote(order_id, safe=''))


def result_count_text(filtered_count, total_count, has_active_filters):
    text = f"Showing {filtered_count} of {total_count}"
    if has_active_filters:
        text += " (filtered)"
    return text


def empty_state_text(has_active_filters):
    if has_active_filters:
        return 'No orders match your filters.'
    return 'No delivered orders found.'


@orders_bp.route('/')
@admin_required
def delivered_orders():
    """Delivered orders page"""
    criteria = FilterCriteria.from_args(request.args)
    orders, load_failed = load_delivered_orders()
    filtered = filter_orders(orders, criteria)

    return render_template(
        'orders/delivered_orders.html',
        orders=filtered,
        criteria=criteria,
        load_failed=load_failed,
        count_text=result_count_text(len(filtered), len(orders), criteria.has_active_filters),
        empty_text=empty_state_text(criteria.has_active_filters),
        payment_filters=PAYMENT_FILTERS,
        date_filters=DATE_FILTERS,
        invoice_url=invoice_url,
        clear_url=url_for('delivered_orders.delivered_orders'),
    )


@orders_bp.route('/api/orders')
@api_admin_required
def api_orders():
    """Filtered delivered orders as JSON"""
    criteria = FilterCriteria.from_args(request.args)
    orders, load_failed = load_delivered_orders()
    filtered = filter_orders(orders, criteria)

    return jsonify({
        'success': not load_failed,
        'orders': [o.to_dict() for o in filtered],
        'total': len(orders),
        'filtered': len(filtered),
        'has_active_filters': criteria.has_active_filters,
    })
