import os
from dotenv import load_dotenv

load_dotenv()

DB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'databases')


class Config:
    IS_PRODUCTION = (
        os.getenv('ENVIRONMENT') == 'production' or
        os.getenv('FLASK_ENV') == 'production'
    )

    SECRET_KEY = os.getenv('FLASK_SECRET_KEY', 'dev-secret-key-change-in-production')
    PORT = int(os.getenv('PORT', '5000'))

    LOG_DB = os.path.join(DB_DIR, 'app_logs.db')

    # Order-management API
    ORDERS_API_URL = os.getenv('ORDERS_API_URL', 'http://localhost:4000')

    BRAND_NAME = os.getenv('BRAND_NAME', 'My DeliveryDesk')
