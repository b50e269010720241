"""
DeliveryDesk Errors
===================

Raised at the order-management API boundary and converted to user-facing
results by the admin views.
"""


class DeliveryDeskError(Exception):
    """Base class for DeliveryDesk errors"""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class OrdersAPIError(DeliveryDeskError):
    """The order-management API could not be reached or answered with a non-2xx status"""

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.status_code = status_code


class MissingCredentialsError(DeliveryDeskError):
    """No bearer token is stored in the session"""

    def __init__(self, message='Authentication token not found.'):
        super().__init__(message)
