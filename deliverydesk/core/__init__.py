"""
DeliveryDesk Core
=================

Core utilities and shared functionality for DeliveryDesk modules.
"""

from .config import Config, get_config_value
from .database import Database
from .logging_service import LoggingService, logger, db_log
from .errors import DeliveryDeskError, OrdersAPIError, MissingCredentialsError
from .api_client import OrdersAPIClient, get_api_client

__all__ = [
    'Config', 'get_config_value', 'Database', 'LoggingService', 'logger', 'db_log',
    'DeliveryDeskError', 'OrdersAPIError', 'MissingCredentialsError',
    'OrdersAPIClient', 'get_api_client',
]
