"""
DeliveryDesk - Delivered Orders Admin
=====================================

A small Flask admin for delivered e-commerce orders, backed entirely by a
remote order-management API:
- Delivered order listing with search, payment and date filters
- Receipt upload and mark-as-paid dialog
- Token-based admin sign-in

Usage:
    from flask import Flask
    from deliverydesk import DeliveryDesk

    app = Flask(__name__)
    DeliveryDesk(app, {'orders_api_url': 'https://api.example.com'})
"""

import os
import logging

from flask_cors import CORS

from .core.api_client import OrdersAPIClient
from .core.config import Config

__version__ = '0.1.0'

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    'brand_name': Config.BRAND_NAME,
    'orders_api_url': Config.ORDERS_API_URL,
    'orders_api_timeout': Config.ORDERS_API_TIMEOUT,
    'cors_origins': None,
}

# Internal config key -> Flask config key
_APP_CONFIG_KEYS = {
    'orders_api_url': 'ORDERS_API_URL',
    'orders_api_timeout': 'ORDERS_API_TIMEOUT',
    'cors_origins': 'CORS_ORIGINS',
    'brand_name': 'BRAND_NAME',
}


class DeliveryDesk:
    """Flask extension registering the DeliveryDesk admin modules"""

    def __init__(self, app=None, config=None):
        self._overrides = dict(config or {})
        self._config = dict(DEFAULT_CONFIG)
        self._config.update(self._overrides)
        self._registered = []
        self.api_client = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        # Explicit config wins, then values already set on the Flask app, then defaults
        for key, app_key in _APP_CONFIG_KEYS.items():
            if key not in self._overrides and app.config.get(app_key) not in (None, ''):
                self._config[key] = app.config[app_key]
            app.config[app_key] = self._config[key]

        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY
        app.config.setdefault('LOG_DB', Config.LOG_DB)
        app.config.setdefault('AUTH_TOKEN_SESSION_KEY', Config.AUTH_TOKEN_SESSION_KEY)
        app.config.setdefault('RECEIPT_SUCCESS_DELAY', Config.RECEIPT_SUCCESS_DELAY)
        app.config.setdefault('ORDER_INVOICE_URL', Config.ORDER_INVOICE_URL)
        app.config.setdefault('DELIVERYDESK_LOGIN_ENDPOINT', Config.DELIVERYDESK_LOGIN_ENDPOINT)

        self._setup_database_dir(app)

        self.api_client = OrdersAPIClient(
            self._config['orders_api_url'],
            timeout=float(self._config['orders_api_timeout']),
        )

        self._register_modules(app)
        self._setup_cors(app)
        self._setup_context_processor(app)

        app.extensions['deliverydesk'] = self
        logger.info(f"DeliveryDesk initialised against {self._config['orders_api_url']}")

    def _setup_database_dir(self, app):
        """Create the directory holding the app_logs database"""
        log_dir = os.path.dirname(app.config['LOG_DB'])
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

    def _register_modules(self, app):
        from .modules.dashboard import dashboard_bp
        from .modules.orders import orders_bp
        from .modules.payments import payments_bp

        for name, blueprint in (('dashboard', dashboard_bp),
                                ('orders', orders_bp),
                                ('payments', payments_bp)):
            if blueprint.name not in app.blueprints:
                app.register_blueprint(blueprint)
            self._registered.append(name)

    def _setup_cors(self, app):
        """Expose the JSON endpoints to a separate front end when origins are configured"""
        origins = self._config.get('cors_origins')
        if not origins:
            return
        if isinstance(origins, str):
            origins = [o.strip() for o in origins.split(',') if o.strip()]
        CORS(app, resources={r"/admin/delivered-orders/api/*": {"origins": origins}},
             supports_credentials=True)

    def _setup_context_processor(self, app):
        @app.context_processor
        def inject_deliverydesk():
            return {
                'deliverydesk_config': dict(self._config),
                'brand_name': self._config.get('brand_name') or 'DeliveryDesk',
            }

    def get_registered_modules(self):
        return list(self._registered)

    @property
    def config(self):
        return dict(self._config)


__all__ = ['DeliveryDesk', '__version__']
