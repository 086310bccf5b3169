"""
Auth decorators for role-based access control.
"""

from functools import wraps

from flask import jsonify
from flask_login import current_user, login_required


def admin_required(f):
    """Decorator that requires the user to be an authenticated admin."""
    @wraps(f)
    @login_required
    def decorated(*args, **kwargs):
        if not current_user.is_admin:
            return jsonify({'error': 'Admin access required'}), 403
        return f(*args, **kwargs)
    return decorated


def super_admin_required(f):
    """Decorator that requires the super-admin role (admins are not enough)."""
    @wraps(f)
    @login_required
    def decorated(*args, **kwargs):
        if not current_user.is_super_admin:
            return jsonify({'error': 'Super admin access required'}), 403
        return f(*args, **kwargs)
    return decorated
