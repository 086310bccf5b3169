"""
Auth Routes - login, logout, current user.
"""

from datetime import datetime

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required, login_user, logout_user

from app.limiter import limiter
from app.models import db, User

bp = Blueprint('auth', __name__)


@bp.route('/api/auth/login', methods=['POST'])
@limiter.limit("5 per minute")
def login():
    """Login with username (or email) and password."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    username = str(data.get('username', '')).strip()
    password = data.get('password', '')

    if not username or not password:
        return jsonify({'error': 'Username and password are required'}), 400

    user = User.query.filter_by(username=username).first()
    if not user and '@' in username:
        user = User.query.filter(db.func.lower(User.email) == username.lower()).first()

    if not user or not user.check_password(password):
        return jsonify({'error': 'Invalid username or password'}), 401

    if not user.enabled:
        return jsonify({'error': 'Account is disabled'}), 403

    login_user(user)
    user.last_login_at = datetime.utcnow()
    db.session.commit()

    return jsonify(user.to_dict())


@bp.route('/api/auth/logout', methods=['POST'])
@login_required
def logout():
    """Logout current user."""
    logout_user()
    return jsonify({'success': True})


@bp.route('/api/auth/me', methods=['GET'])
@login_required
def me():
    """Get current user profile."""
    return jsonify(current_user.to_dict())
