"""
DeliveryDesk Starter Template
=============================

A ready-to-run Flask application with the DeliveryDesk admin enabled.

Run with:
    python app.py

Visit:
    http://localhost:5000/admin/login              - Admin sign-in (API token)
    http://localhost:5000/admin/delivered-orders/  - Delivered orders
"""

from flask import Flask, redirect, url_for
from deliverydesk import DeliveryDesk
from deliverydesk.core.logging_service import LoggingService

from config import Config

# Create Flask app
app = Flask(__name__)
app.config['SECRET_KEY'] = Config.SECRET_KEY
app.config['LOG_DB'] = Config.LOG_DB

# Session security
app.config['SESSION_COOKIE_SECURE'] = Config.IS_PRODUCTION
app.config['SESSION_COOKIE_HTTPONLY'] = True
app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'

# Initialize DeliveryDesk - this registers all modules automatically
deliverydesk = DeliveryDesk(app, {
    'orders_api_url': Config.ORDERS_API_URL,
    'brand_name': Config.BRAND_NAME,
})


@app.route('/')
def index():
    """Send visitors straight to the admin"""
    return redirect(url_for('delivered_orders.delivered_orders'))


if __name__ == '__main__':
    with app.app_context():
        LoggingService.cleanup_old_logs(days_to_keep=30)

    print("\n" + "=" * 60)
    print("DeliveryDesk Starter Template")
    print("=" * 60)
    print(f"Order API:       {Config.ORDERS_API_URL}")
    print(f"Admin Login:     http://localhost:{Config.PORT}/admin/login")
    print(f"Orders:          http://localhost:{Config.PORT}/admin/delivered-orders/")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=Config.PORT, debug=not Config.IS_PRODUCTION)
