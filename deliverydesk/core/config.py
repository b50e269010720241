import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for DeliveryDesk.
    Projects should provide the order-management API origin via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')

    # Get DB_DIR from environment, or use a default if not set
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))

    # Persistent app_logs table lives here
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, "app_logs.db"))

    # Remote order-management API
    ORDERS_API_URL = os.getenv('ORDERS_API_URL', 'http://localhost:4000')
    ORDERS_API_TIMEOUT = float(os.getenv('ORDERS_API_TIMEOUT', '30'))

    # Session key holding the bearer token issued by the order-management API
    AUTH_TOKEN_SESSION_KEY = os.getenv('AUTH_TOKEN_SESSION_KEY', 'authToken')

    # Seconds the receipt dialog shows its success message before returning to the list
    RECEIPT_SUCCESS_DELAY = float(os.getenv('RECEIPT_SUCCESS_DELAY', '1.5'))

    # Invoice view lives outside this package
    ORDER_INVOICE_URL = os.getenv('ORDER_INVOICE_URL', '/authenticated/view-orders/{order_id}')

    # Branding
    BRAND_NAME = os.getenv('BRAND_NAME', 'DeliveryDesk')

    # Login endpoint admin views redirect to - projects with their own sign-in can override this
    DELIVERYDESK_LOGIN_ENDPOINT = os.getenv('DELIVERYDESK_LOGIN_ENDPOINT', 'admin.login')

    # Port for local server (optional, projects can set this)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config class, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val is not None and val != '':
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val is not None and val != '':
        return val
    return os.getenv(key, default)
