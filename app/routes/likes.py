"""
Program Like Routes - add/remove reactions and read reaction counts.
"""

from flask import Blueprint, jsonify, request
from flask_login import current_user, login_required

from app.models import db, Program, ProgramLike
from app.repositories import ProgramLikeRepository

bp = Blueprint('likes', __name__)


@bp.route('/project/<program_id>/like', methods=['POST'])
@login_required
def like_program(program_id):
    """Add or remove one reaction of the current user."""
    user = current_user._get_current_object()
    program = db.session.get(Program, program_id)
    if not program:
        return jsonify({'error': 'Program not found'}), 404

    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    like_type = ProgramLike.type_from_name(data.get('type', ProgramLike.TYPE_NAMES[ProgramLike.TYPE_THUMBS_UP]))
    if like_type is None:
        return jsonify({'error': 'Invalid like type'}), 400

    action = data.get('action', ProgramLike.ACTION_ADD)
    if action == ProgramLike.ACTION_ADD:
        ProgramLikeRepository.add_like(program, user, like_type)
    elif action == ProgramLike.ACTION_REMOVE:
        ProgramLikeRepository.remove_like(program, user, like_type)
    else:
        return jsonify({'error': 'Invalid action'}), 400

    return jsonify({
        'totalLikeCount': ProgramLikeRepository.total_like_count(program.id),
        'activeLikeTypes': ProgramLikeRepository.active_like_types(program.id, user.id),
    })


@bp.route('/project/<program_id>/likes', methods=['GET'])
def program_likes(program_id):
    """Reaction counts of a program, per type."""
    program = db.session.get(Program, program_id)
    if not program:
        return jsonify({'error': 'Program not found'}), 404

    return jsonify({
        'total': ProgramLikeRepository.total_like_count(program.id),
        'types': ProgramLikeRepository.like_type_counts(program.id),
    })
