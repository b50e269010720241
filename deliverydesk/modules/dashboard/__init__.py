"""
Dashboard Module
================

Admin shell for DeliveryDesk.

Provides:
- Admin sign-in with a bearer token issued by the order-management API
- Sign-out (clears the admin session and the stored token)
- The admin_required guards other modules use
- The base layout the other modules' templates extend
"""

from flask import Blueprint

# Note: Blueprint name is 'admin' so other projects' login endpoints can keep 'auth'
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates'
)

# Import routes after blueprint is created
from . import routes

__all__ = ['dashboard_bp']
