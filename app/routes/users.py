"""
User API Routes - registration plus the not-yet-implemented user endpoints.
"""

from flask import Blueprint, jsonify, request
from flask_login import login_required

from app.limiter import limiter
from app.services.registration import validate_registration, register_user

bp = Blueprint('users', __name__)


def _as_text(value):
    return '' if value is None else str(value)


def _not_implemented():
    return jsonify({'error': 'Not implemented'}), 501


@bp.route('/user', methods=['POST'])
@limiter.limit("5 per minute")
def register():
    """Register a new user, or only validate the request when dry_run is set."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}

    email = _as_text(data.get('email'))
    username = _as_text(data.get('username'))
    password = _as_text(data.get('password'))
    dry_run = data.get('dry_run') is True

    errors = validate_registration(email, username, password)
    if errors:
        return jsonify(errors), 422

    if dry_run:
        return '', 204

    user = register_user(email, username, password)
    return jsonify({'token': user.upload_token}), 201


@bp.route('/user', methods=['DELETE'])
@login_required
def delete_user():
    return _not_implemented()


@bp.route('/user', methods=['GET'])
@login_required
def get_current_user():
    return _not_implemented()


@bp.route('/user', methods=['PUT'])
@login_required
def update_user():
    return _not_implemented()


@bp.route('/user/<id>', methods=['GET'])
def get_user(id):
    return _not_implemented()


@bp.route('/users/search', methods=['GET'])
def search_users():
    return _not_implemented()
