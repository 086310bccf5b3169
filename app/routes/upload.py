"""
Upload Routes - store a new program from a .catrobat archive.
"""

import tempfile
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from app.services.program_service import ProgramService

bp = Blueprint('upload', __name__)


@bp.route('/upload', methods=['POST'])
@login_required
def upload_program():
    """Upload a program archive (multipart field "file")."""
    archive = request.files.get('file')
    if archive is None or not archive.filename:
        return jsonify({'error': 'No program file uploaded'}), 400

    name = str(request.form.get('name', '')).strip() or None

    service = ProgramService(
        extract_dir=current_app.config['EXTRACT_DIR'],
        program_dir=current_app.config['PROGRAM_DIR'],
    )

    upload_dir = Path(current_app.config['EXTRACT_DIR'])
    upload_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, suffix='.catrobat') as tmp:
        archive.save(tmp)
        tmp.flush()
        # InvalidArchiveError / InvalidCatrobatFileError are turned into 422 by the app error handler
        program = service.add_program(current_user._get_current_object(), tmp.name, name=name)

    return jsonify(program.to_dict()), 201
