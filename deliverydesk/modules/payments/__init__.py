"""
Receipts Module
===============

Receipt/payment dialog for delivered orders. Plugs into the delivered
orders listing, which links here with its filter state.
"""

from flask import Blueprint

payments_bp = Blueprint(
    'receipts',
    __name__,
    url_prefix='/admin/delivered-orders',
    template_folder='templates'
)

from . import routes

__all__ = ['payments_bp']
