"""
Session Credentials
===================

The bearer token issued by the order-management API is kept in the Flask
session. Views resolve it once per request with get_credentials() and pass
the result to the API client, instead of looking the token up at each call.
"""

from flask import session

from .config import get_config_value


class MissingCredentials:
    """No token is stored for this session"""

    token = None

    def __bool__(self):
        return False

    def __repr__(self):
        return 'MissingCredentials()'


class SessionCredentials:
    """A bearer token read from the session"""

    def __init__(self, token):
        self.token = token

    def __bool__(self):
        return True

    def auth_header(self):
        return {'Authorization': f'Bearer {self.token}'}

    def __repr__(self):
        # Never echo the token itself
        return 'SessionCredentials(token=***)'


MISSING = MissingCredentials()


def _session_key():
    return get_config_value('AUTH_TOKEN_SESSION_KEY', 'authToken')


def get_credentials():
    """Return SessionCredentials for the stored token, or MISSING"""
    token = session.get(_session_key())
    if not token or not isinstance(token, str) or not token.strip():
        return MISSING
    return SessionCredentials(token.strip())


def store_token(token):
    session[_session_key()] = token


def clear_token():
    session.pop(_session_key(), None)
