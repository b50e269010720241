"""
DeliveryDesk Modules
====================

Flask blueprint modules for the delivered orders admin.
"""

__all__ = ['dashboard', 'orders', 'payments']
