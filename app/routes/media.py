"""
Media Library Routes - read-only browsing of package -> category -> file.

Not-found conditions are reported through ``statusCode`` in the JSON body
(with HTTP 200) because the apps that consume these endpoints expect it.
"""

import re
from pathlib import Path

from flask import Blueprint, abort, current_app, jsonify, request, send_from_directory, url_for

from app.models import db, MediaPackage, MediaPackageCategory, MediaPackageFile
from app.status_codes import StatusCode

bp = Blueprint('media', __name__)

_WORD_RE = re.compile(r'\w+')

# Id of the pseudo category appended unless the flavor is pocketcode
FLAVOR_CATEGORY_ID = 9223372036854775807


def _require_word(*segments):
    for segment in segments:
        if not _WORD_RE.fullmatch(segment):
            abort(404)


def _file_record(media_file):
    return media_file.to_dict(
        download_url=url_for('media.download_media_file', file_id=media_file.id)
    )


def _files_of_categories(categories):
    records = []
    for category in categories:
        for media_file in category.files:
            records.append(_file_record(media_file))
    return records


def _status(code, message=None):
    payload = {'statusCode': code}
    if message is not None:
        payload['message'] = message
    return jsonify(payload)


@bp.route('/api/media/json', methods=['GET'])
def media_library():
    """All media files as a flat list."""
    files = MediaPackageFile.query.order_by(MediaPackageFile.id.asc()).all()
    return jsonify([_file_record(f) for f in files])


@bp.route('/api/media/category/json', methods=['GET'])
def list_categories():
    """All categories, plus a pseudo category for the requesting flavor."""
    categories = MediaPackageCategory.query.order_by(MediaPackageCategory.id.asc()).all()
    if not categories:
        return _status(StatusCode.MEDIA_LIB_CATEGORY_NOT_FOUND, 'No category found.')

    data = [c.to_dict() for c in categories]

    flavor = request.args.get('flavor')
    if flavor != 'pocketcode':
        data.append({
            'id': FLAVOR_CATEGORY_ID,
            'name': flavor,
            'displayID': (flavor or '').replace(' ', ''),
        })

    return jsonify({'statusCode': StatusCode.OK, 'data': data})


@bp.route('/api/media/category/<category>/json', methods=['GET'])
def files_for_category(category):
    """Files of every category with this name (case-insensitive)."""
    _require_word(category)
    categories = (
        MediaPackageCategory.query
        .filter(db.func.lower(MediaPackageCategory.name) == category.lower())
        .order_by(MediaPackageCategory.id.asc())
        .all()
    )
    if not categories:
        return _status(StatusCode.MEDIA_LIB_CATEGORY_NOT_FOUND, f'category {category} not found')

    return jsonify({'statusCode': StatusCode.OK, 'data': _files_of_categories(categories)})


def _package_files_response(media_package, package):
    if media_package is None:
        return _status(StatusCode.MEDIA_LIB_PACKAGE_NOT_FOUND, f'{package} not found')
    return jsonify(_files_of_categories(media_package.categories))


@bp.route('/api/media/package/<package>/json', methods=['GET'])
def files_for_package(package):
    """Files of a package looked up by its exact name."""
    _require_word(package)
    media_package = MediaPackage.query.filter_by(name=package).first()
    return _package_files_response(media_package, package)


@bp.route('/api/media/packageByNameUrl/<package>/json', methods=['GET'])
def files_for_package_by_name_url(package):
    """Files of a package looked up by its exact URL slug."""
    _require_word(package)
    media_package = MediaPackage.query.filter_by(name_url=package).first()
    return _package_files_response(media_package, package)


@bp.route('/api/media/package/<package>/<category>/json', methods=['GET'])
def files_for_package_and_category(package, category):
    """Files of one category (case-insensitive) inside one package (exact)."""
    _require_word(package, category)
    media_package = MediaPackage.query.filter_by(name=package).first()
    if media_package is None:
        return _status(StatusCode.MEDIA_LIB_PACKAGE_NOT_FOUND, f'{package} not found')

    if not media_package.categories:
        return _status(
            StatusCode.MEDIA_LIB_CATEGORY_NOT_FOUND,
            f"category {category} not found in package {package} "
            f"because the package doesn't contain any categories",
        )

    matching = [c for c in media_package.categories if c.name.lower() == category.lower()]
    if not matching:
        return _status(
            StatusCode.MEDIA_LIB_CATEGORY_NOT_FOUND,
            f'category {category} not found in package {package}',
        )

    return jsonify(_files_of_categories(matching))


@bp.route('/api/media/file/<int:file_id>/json', methods=['GET'])
def single_file(file_id):
    """One media file by id."""
    if file_id == 0:
        return _status(StatusCode.NOT_FOUND)
    media_file = db.session.get(MediaPackageFile, file_id)
    if media_file is None:
        return _status(StatusCode.NOT_FOUND)
    return jsonify(_file_record(media_file))


@bp.route('/download-media/<int:file_id>', methods=['GET'])
def download_media_file(file_id):
    """Send the asset of a media file and count the download."""
    media_file = db.session.get(MediaPackageFile, file_id)
    if media_file is None:
        return jsonify({'error': 'Media file not found'}), 404

    media_dir = Path(current_app.config['MEDIA_PACKAGE_DIR'])
    if not (media_dir / media_file.file_name).is_file():
        return jsonify({'error': 'Media file not found'}), 404

    media_file.downloads = (media_file.downloads or 0) + 1
    db.session.commit()

    return send_from_directory(
        media_dir,
        media_file.file_name,
        as_attachment=True,
        download_name=f'{media_file.name}.{media_file.extension}',
    )
