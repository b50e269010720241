"""
Admin Dashboard Routes
======================

Sign-in/sign-out for the DeliveryDesk admin. The order-management API issues
the bearer token; it is stored in the session as-is and never validated here.
"""

from flask import render_template, request, redirect, url_for, flash, session
from . import dashboard_bp
from .utils import is_safe_next
from ...core.credentials import store_token, clear_token
from ...core.logging_service import LoggingService


@dashboard_bp.route('/')
def index():
    """Admin landing page - the delivered orders list"""
    return redirect(url_for('delivered_orders.delivered_orders'))


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin sign-in page"""
    next_url = request.values.get('next', '')

    if request.method == 'POST':
        name = request.form.get('name', '').strip() or 'admin'
        token = request.form.get('token', '').strip()

        if not token:
            flash('An API token is required to sign in.', 'error')
            return render_template('dashboard/login.html', next_url=next_url), 400

        session.clear()
        session['admin_id'] = name
        store_token(token)
        LoggingService.log_user_action('admin', 'login', user_id=name)

        if is_safe_next(next_url):
            return redirect(next_url)
        return redirect(url_for('delivered_orders.delivered_orders'))

    return render_template('dashboard/login.html', next_url=next_url)


@dashboard_bp.route('/logout')
def logout():
    """Sign out and forget the stored token"""
    admin_id = session.get('admin_id')
    clear_token()
    session.pop('admin_id', None)
    if admin_id:
        LoggingService.log_user_action('admin', 'logout', user_id=str(admin_id))
    flash('Signed out.', 'success')
    return redirect(url_for('admin.login'))
