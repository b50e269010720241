import os
import sqlite3


class Database:

    @staticmethod
    def connect(path):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        return sqlite3.connect(path)

    @staticmethod
    def get_log_db_path():
        """Resolve the app_logs database path (app config > Config > env)"""
        from .config import get_config_value
        return get_config_value('LOG_DB')
