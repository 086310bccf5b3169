"""
Program upload tests.

Covers:
  - Accepted archive creates a program and stores the file
  - Rejected archives (unexpected files, missing code.xml, not a zip, unsafe paths)
  - Temporary extraction is cleaned up
"""

import io
import os
import sys
import tempfile
import zipfile
from pathlib import Path

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

CODE_XML = (
    '<?xml version="1.0" encoding="UTF-8"?>'
    '<program><header><programName>Jumper</programName></header></program>'
)


@pytest.fixture(scope='module')
def tmp_root():
    return Path(tempfile.mkdtemp())


@pytest.fixture(scope='module')
def app(tmp_root):
    """Create a fresh app with an in-memory database."""
    os.environ['CATROWEB_ADMIN_USERNAME'] = 'admin'
    os.environ['CATROWEB_ADMIN_EMAIL'] = 'admin@test.com'
    os.environ['CATROWEB_ADMIN_PASSWORD'] = 'adminpass1'
    os.environ['SECRET_KEY'] = 'test-secret-key-fixed'

    from config import config
    config.SQLALCHEMY_DATABASE_URI = 'sqlite://'
    config.LOG_DIR = tmp_root / 'log'
    config.MEDIA_PACKAGE_DIR = tmp_root / 'media'
    config.PROGRAM_DIR = tmp_root / 'programs'
    config.EXTRACT_DIR = tmp_root / 'extract'

    from app import create_app
    application = create_app(testing=True)
    yield application


@pytest.fixture(scope='module')
def client(app):
    """Authenticated uploader."""
    client = app.test_client()
    resp = client.post('/api/user', json={
        'email': 'maker@test.com', 'username': 'maker', 'password': 'makerpass',
    })
    assert resp.status_code == 201
    resp = client.post('/api/auth/login', json={'username': 'maker', 'password': 'makerpass'})
    assert resp.status_code == 200
    return client


def _archive(entries):
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w') as archive:
        for name, content in entries.items():
            archive.writestr(name, content)
    buffer.seek(0)
    return buffer


def _upload(client, buffer, **form):
    data = dict(form)
    data['file'] = (buffer, 'program.catrobat')
    return client.post('/api/upload', data=data, content_type='multipart/form-data')


class TestUpload:
    def test_guest_cannot_upload(self, app):
        resp = _upload(app.test_client(), _archive({'code.xml': CODE_XML}))
        assert resp.status_code == 401

    def test_missing_file(self, client):
        resp = client.post('/api/upload', data={}, content_type='multipart/form-data')
        assert resp.status_code == 400

    def test_valid_archive(self, app, client, tmp_root):
        resp = _upload(client, _archive({
            'code.xml': CODE_XML,
            'screenshot.png': b'png',
            'images/hero.png': b'png',
            'sounds/jump.wav': b'wav',
        }))
        assert resp.status_code == 201
        data = resp.get_json()
        assert data['name'] == 'Jumper'
        assert data['author'] == 'maker'
        assert (tmp_root / 'programs' / f"{data['id']}.catrobat").is_file()

        with app.app_context():
            from app.models import db, Program
            assert db.session.get(Program, data['id']) is not None

    def test_explicit_name_wins(self, client):
        resp = _upload(client, _archive({'code.xml': CODE_XML}), name='My Jumper')
        assert resp.status_code == 201
        assert resp.get_json()['name'] == 'My Jumper'

    def test_unexpected_files_rejected(self, app, client):
        with app.app_context():
            from app.models import Program
            before = Program.query.count()

        resp = _upload(client, _archive({'code.xml': CODE_XML, 'evil.exe': b'MZ'}))
        assert resp.status_code == 422
        assert resp.get_json() == {'error': 'unexpected files found: evil.exe', 'statusCode': 505}

        with app.app_context():
            from app.models import Program
            assert Program.query.count() == before

    def test_missing_code_xml_rejected(self, client):
        resp = _upload(client, _archive({'screenshot.png': b'png'}))
        assert resp.status_code == 422
        assert 'code.xml' in resp.get_json()['error']

    def test_not_a_zip_rejected(self, client):
        resp = _upload(client, io.BytesIO(b'definitely not a zip'))
        assert resp.status_code == 422

    def test_path_traversal_rejected(self, client, tmp_root):
        resp = _upload(client, _archive({'code.xml': CODE_XML, '../../escape.txt': b'x'}))
        assert resp.status_code == 422
        assert not (tmp_root / 'escape.txt').exists()

    def test_extraction_is_cleaned_up(self, tmp_root):
        assert list((tmp_root / 'extract').iterdir()) == []
