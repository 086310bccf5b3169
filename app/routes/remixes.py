"""
Remix Routes - Scratch sources a program was remixed from.
"""

from flask import Blueprint, jsonify

from app.models import db, Program
from app.repositories import ScratchProgramRemixRepository

bp = Blueprint('remixes', __name__)


@bp.route('/project/<program_id>/scratch-remixes', methods=['GET'])
def scratch_remix_parents(program_id):
    """Scratch project ids this program was derived from."""
    program = db.session.get(Program, program_id)
    if not program:
        return jsonify({'error': 'Program not found'}), 404

    relations = ScratchProgramRemixRepository.get_direct_edge_relations_of_program_ids([program.id])
    return jsonify({
        'program_id': program.id,
        'scratch_parents': sorted(r.scratch_parent_id for r in relations),
    })
