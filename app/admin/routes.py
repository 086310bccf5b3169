"""
Admin Routes - log files and remix relation maintenance.
"""

import logging
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_file
from flask_login import current_user

from app.auth.decorators import admin_required, super_admin_required
from app.repositories import ScratchProgramRemixRepository

logger = logging.getLogger(__name__)

bp = Blueprint('admin', __name__)

# Log files are looked up at most one sub-directory deep
MAX_LOG_DEPTH = 2


def _log_dir():
    return Path(current_app.config['LOG_DIR']).resolve()


def resolve_log_file(log_dir, file_name):
    """
    Resolve a requested log file name inside log_dir.

    Returns the Path, or None when the name is empty, escapes log_dir,
    is nested too deep or does not name a regular file.
    """
    if not file_name:
        return None
    log_dir = Path(log_dir).resolve()
    try:
        candidate = (log_dir / file_name.lstrip('/')).resolve()
        if candidate == log_dir or log_dir not in candidate.parents:
            return None
        if len(candidate.relative_to(log_dir).parts) > MAX_LOG_DEPTH:
            return None
        if not candidate.is_file():
            return None
    except (ValueError, OSError):
        # null bytes and names the OS refuses
        return None
    return candidate


@bp.route('/admin/downloadLogs/', methods=['GET'])
@super_admin_required
def download_log():
    """Download one log file as a plain-text attachment."""
    file_name = request.args.get('file', '')
    path = resolve_log_file(_log_dir(), file_name)
    if path is None:
        return jsonify({'error': 'Log file not found'}), 404

    logger.info("Super admin %s downloaded log %s", current_user.username, file_name)
    return send_file(
        path,
        mimetype='text/plain',
        as_attachment=True,
        download_name=path.name,
    )


@bp.route('/api/admin/logs', methods=['GET'])
@super_admin_required
def list_logs():
    """List the downloadable log files."""
    log_dir = _log_dir()
    files = []
    if log_dir.exists():
        for path in sorted(log_dir.rglob('*')):
            if not path.is_file():
                continue
            rel = path.relative_to(log_dir)
            if len(rel.parts) > MAX_LOG_DEPTH:
                continue
            files.append({'name': rel.as_posix(), 'size': path.stat().st_size})
    return jsonify({'files': files})


@bp.route('/api/admin/scratch-remix-relations', methods=['DELETE'])
@admin_required
def purge_scratch_remix_relations():
    """Remove every Scratch remix relation."""
    deleted = ScratchProgramRemixRepository.remove_all_relations()
    logger.info("Admin %s purged %d scratch remix relations", current_user.username, deleted)
    return jsonify({'success': True, 'deleted': deleted})
