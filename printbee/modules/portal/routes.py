"""
Portal Routes
=============

The admin credential lives in the Flask session and is lifted into
``g.admin_credential`` per request, then passed explicitly to the client.
"""

import logging
from functools import wraps

from flask import render_template, request, redirect, url_for, session, flash, g

from printbee.client import (
    PrintBeeClient, AdminCredential, ClientError, Attachment, build_submission,
    DashboardState, summarize, chart_data
)
from printbee.client.dashboard import ALL_STATUSES
from printbee.core import get_config_value, logger as db_logger
from printbee.modules.orders.models import (
    ValidationError, JOB_STATUSES, PAYMENT_METHODS, REQUIRED_FIELDS
)
from . import portal_bp

logger = logging.getLogger(__name__)

SESSION_KEY = 'admin_pwd'
ORDER_FAILED = 'Order submission failed. Please try again.'


def get_client():
    """Client for the proxy; same host unless PRINTBEE_API_URL is set"""
    base_url = get_config_value('PRINTBEE_API_URL') or request.host_url
    timeout = get_config_value('STORE_TIMEOUT')
    return PrintBeeClient(base_url, timeout=float(timeout) if timeout else None)


def credential_required(f):
    """Decorator to require a stored admin credential"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        password = session.get(SESSION_KEY)
        if not password:
            return redirect(url_for('portal.login'))
        g.admin_credential = AdminCredential(password)
        return f(*args, **kwargs)
    return decorated_function


def _order_fields(form):
    fields = {key: form.get(key, '') for key in REQUIRED_FIELDS}
    if form.get('price', '').strip():
        fields['price'] = form.get('price').strip()
    return fields


def _render_dashboard(state):
    search = request.values.get('q', '')
    status = request.values.get('status', ALL_STATUSES)
    return render_template('portal/dashboard.html',
                           stats=state.stats,
                           orders=state.visible_orders(search, status),
                           search=search,
                           status_filter=status,
                           job_statuses=JOB_STATUSES,
                           payment_methods=PAYMENT_METHODS)


def _logged_out():
    session.pop(SESSION_KEY, None)
    flash('Please log in again', 'error')
    return redirect(url_for('portal.login'))


# ===== Public =====

@portal_bp.route('/', methods=['GET', 'POST'])
def order_form():
    """Public order form"""
    if request.method == 'GET':
        return render_template('portal/order_form.html', form={},
                               payment_methods=PAYMENT_METHODS)

    attachments = [Attachment.from_upload(f) for f in request.files.getlist('files') if f.filename]

    try:
        body = build_submission(request.form, attachments, request.form.get('link'))
        order_id = get_client().submit_order(body)
    except ValidationError as e:
        flash(str(e), 'error')
        return render_template('portal/order_form.html', form=request.form,
                               payment_methods=PAYMENT_METHODS), 400
    except ClientError as e:
        logger.error(f"Order submission failed: {e}")
        db_logger.error('portal', f"Order submission failed: {e}")
        flash(ORDER_FAILED, 'error')
        return render_template('portal/order_form.html', form=request.form,
                               payment_methods=PAYMENT_METHODS), 502

    return render_template('portal/order_form.html', form={}, order_id=order_id,
                           payment_methods=PAYMENT_METHODS)


# ===== Admin =====

@portal_bp.route('/admin', methods=['GET', 'POST'])
def login():
    """Admin login page"""
    if session.get(SESSION_KEY):
        return redirect(url_for('portal.dashboard'))

    if request.method == 'POST':
        password = request.form.get('password', '')
        if not password:
            flash('Please enter the admin password', 'error')
            return render_template('portal/login.html'), 400
        try:
            credential = get_client().login(password)
        except ClientError as e:
            logger.warning(f"Login error: {e}")
            flash(str(e) or 'Server error', 'error')
            return render_template('portal/login.html'), 401

        session[SESSION_KEY] = credential.password
        return redirect(url_for('portal.dashboard'))

    return render_template('portal/login.html')


@portal_bp.route('/admin/logout')
def logout():
    session.pop(SESSION_KEY, None)
    flash('You have been logged out', 'info')
    return redirect(url_for('portal.login'))


@portal_bp.route('/dashboard')
@credential_required
def dashboard():
    state = DashboardState(get_client(), g.admin_credential)
    try:
        state.load()
    except ClientError as e:
        if e.status_code == 401:
            return _logged_out()
        logger.error(f"Error loading dashboard: {e}")
        flash('Failed to load dashboard', 'error')
    return _render_dashboard(state)


@portal_bp.route('/dashboard/orders/<order_id>', methods=['POST'])
@credential_required
def save_order(order_id):
    """Apply the row's price/status edits and save them"""
    state = DashboardState(get_client(), g.admin_credential)
    try:
        state.load()
        state.set_price(order_id, request.form.get('price', ''))
        state.set_status(order_id, request.form.get('jobStatus'))
        state.save(order_id)
        flash('Order updated successfully!', 'success')
    except KeyError:
        flash(f'Order {order_id} not found', 'error')
    except ValidationError as e:
        flash(str(e), 'error')
    except ClientError as e:
        if e.status_code == 401:
            return _logged_out()
        logger.error(f"Error updating order: {e}")
        flash(f'Failed to update order: {e}', 'error')
    return _render_dashboard(state)


@portal_bp.route('/dashboard/orders', methods=['POST'])
@credential_required
def create_order():
    """Manual order; shown at the top without reloading the list"""
    state = DashboardState(get_client(), g.admin_credential)
    try:
        state.load()
        order_id = state.create(_order_fields(request.form))
        flash(f'Custom order {order_id} created successfully!', 'success')
    except ValidationError as e:
        flash(str(e), 'error')
    except ClientError as e:
        if e.status_code == 401:
            return _logged_out()
        logger.error(f"Error creating custom order: {e}")
        flash(f'Failed to create order: {e}', 'error')
    return _render_dashboard(state)


@portal_bp.route('/analytics')
@credential_required
def analytics():
    try:
        orders = get_client().get_orders(g.admin_credential)
    except ClientError as e:
        if e.status_code == 401:
            return _logged_out()
        logger.error(f"Analytics fetch error: {e}")
        orders = []

    charts = chart_data(summarize(orders)) if orders else None
    return render_template('portal/analytics.html', charts=charts)
