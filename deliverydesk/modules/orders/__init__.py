"""
Delivered Orders Module
=======================

Admin listing of delivered orders fetched from the order-management API.

Provides:
- Order listing with search, payment-status and date-range filters
- JSON twin of the filtered listing
- Links to the invoice view and the receipt/payment dialog
"""

from flask import Blueprint

orders_bp = Blueprint(
    'delivered_orders',
    __name__,
    url_prefix='/admin/delivered-orders',
    template_folder='templates'
)

from . import routes

__all__ = ['orders_bp']
