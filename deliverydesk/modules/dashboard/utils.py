from functools import wraps

from flask import jsonify, redirect, request, session, url_for

from ...core.config import get_config_value


def admin_required(f):
    """Decorator to require admin login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            login_endpoint = get_config_value('DELIVERYDESK_LOGIN_ENDPOINT', 'admin.login')
            return redirect(url_for(login_endpoint, next=request.full_path.rstrip('?')))
        return f(*args, **kwargs)
    return decorated_function


def api_admin_required(f):
    """Decorator for JSON endpoints - answers 401 instead of redirecting"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if 'admin_id' not in session:
            return jsonify({'success': False, 'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function


def is_safe_next(target):
    """Only allow relative redirects back into this site"""
    return bool(target) and target.startswith('/') and not target.startswith('//')
