"""
Program like tests.

Covers:
  - Valid reaction types and type names
  - Composite key (program, user, type)
  - created_at set once on first insert, immutable afterwards
  - Like/unlike API and public counts
"""

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import FlushError

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


@pytest.fixture(scope='module')
def app():
    """Create a fresh app with an in-memory database."""
    os.environ['CATROWEB_ADMIN_USERNAME'] = 'admin'
    os.environ['CATROWEB_ADMIN_EMAIL'] = 'admin@test.com'
    os.environ['CATROWEB_ADMIN_PASSWORD'] = 'adminpass1'
    os.environ['SECRET_KEY'] = 'test-secret-key-fixed'

    tmp = Path(tempfile.mkdtemp())
    from config import config
    config.SQLALCHEMY_DATABASE_URI = 'sqlite://'
    config.LOG_DIR = tmp / 'log'
    config.MEDIA_PACKAGE_DIR = tmp / 'media'
    config.PROGRAM_DIR = tmp / 'programs'
    config.EXTRACT_DIR = tmp / 'extract'

    from app import create_app
    application = create_app(testing=True)
    yield application


@pytest.fixture(scope='module')
def ids(app):
    """One liker, one owner and two programs."""
    with app.app_context():
        from app.models import db, User, Program
        owner = User(username='owner', email='owner@test.com', enabled=True)
        owner.set_password('ownerpass')
        liker = User(username='liker', email='liker@test.com', enabled=True)
        liker.set_password('likerpass')
        first = Program(name='Flappy', user=owner)
        second = Program(name='Pong', user=owner)
        db.session.add_all([owner, liker, first, second])
        db.session.commit()
        return {'liker': liker.id, 'first': first.id, 'second': second.id}


@pytest.fixture(scope='module')
def liker_client(app, ids):
    client = app.test_client()
    resp = client.post('/api/auth/login', json={'username': 'liker', 'password': 'likerpass'})
    assert resp.status_code == 200
    return client


# ---------------------------------------------------------------------------
# Model
# ---------------------------------------------------------------------------

class TestLikeTypes:
    def test_valid_types(self):
        from app.models import ProgramLike
        for like_type in (1, 2, 3, 4):
            assert ProgramLike.is_valid_type(like_type)

    def test_invalid_types(self):
        from app.models import ProgramLike
        for like_type in (ProgramLike.TYPE_NONE, 5, -1, True, '1', None):
            assert not ProgramLike.is_valid_type(like_type)

    def test_type_from_name(self):
        from app.models import ProgramLike
        assert ProgramLike.type_from_name('thumbs_up') == ProgramLike.TYPE_THUMBS_UP
        assert ProgramLike.type_from_name('wow') == ProgramLike.TYPE_WOW
        assert ProgramLike.type_from_name(3) == ProgramLike.TYPE_LOVE
        assert ProgramLike.type_from_name('angry') is None
        assert ProgramLike.type_from_name(0) is None

    def test_constructor_rejects_invalid_type(self, app, ids):
        from app.exceptions import InvalidLikeTypeError
        with app.app_context():
            from app.models import db, User, Program, ProgramLike
            program = db.session.get(Program, ids['first'])
            user = db.session.get(User, ids['liker'])
            with pytest.raises(InvalidLikeTypeError):
                ProgramLike(program, user, 7)


class TestLikePersistence:
    def test_created_at_is_set_on_insert(self, app, ids):
        with app.app_context():
            from app.models import db, User, Program, ProgramLike
            program = db.session.get(Program, ids['second'])
            user = db.session.get(User, ids['liker'])

            like = ProgramLike(program, user, ProgramLike.TYPE_SMILE)
            assert like.created_at is None
            db.session.add(like)
            db.session.commit()

            assert isinstance(like.created_at, datetime)
            assert like.type_as_string == 'smile'
            assert like.program_id == program.id
            assert like.user_id == user.id

    def test_created_at_cannot_change(self, app, ids):
        with app.app_context():
            from app.models import db, ProgramLike
            like = db.session.get(ProgramLike, (ids['second'], ids['liker'], ProgramLike.TYPE_SMILE))
            original = like.created_at

            like.created_at = original
            with pytest.raises(ValueError):
                like.created_at = datetime(2000, 1, 1)

            db.session.commit()
            assert db.session.get(
                ProgramLike, (ids['second'], ids['liker'], ProgramLike.TYPE_SMILE)
            ).created_at == original

    def test_preset_created_at_is_kept(self, app, ids):
        with app.app_context():
            from app.models import db, User, Program, ProgramLike
            program = db.session.get(Program, ids['second'])
            user = db.session.get(User, ids['liker'])

            stamp = datetime(2020, 5, 17, 12, 0, 0)
            like = ProgramLike(program, user, ProgramLike.TYPE_WOW)
            like.created_at = stamp
            db.session.add(like)
            db.session.commit()
            assert like.created_at == stamp

    def test_same_key_twice_violates_primary_key(self, app, ids):
        with app.app_context():
            from app.models import db, User, Program, ProgramLike
            db.session.expunge_all()
            program = db.session.get(Program, ids['second'])
            user = db.session.get(User, ids['liker'])
            db.session.expunge(db.session.get(
                ProgramLike, (ids['second'], ids['liker'], ProgramLike.TYPE_SMILE)
            ))

            duplicate = ProgramLike(program, user, ProgramLike.TYPE_SMILE)
            db.session.add(duplicate)
            with pytest.raises((IntegrityError, FlushError)):
                db.session.commit()
            db.session.rollback()

    def test_different_types_coexist(self, app, ids):
        with app.app_context():
            from app.models import ProgramLike
            from app.repositories import ProgramLikeRepository
            types = ProgramLikeRepository.active_like_types(ids['second'], ids['liker'])
            assert types == ['smile', 'wow']
            assert ProgramLike.query.filter_by(program_id=ids['second']).count() == 2


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

class TestLikeRoutes:
    def test_guest_cannot_like(self, app, ids):
        resp = app.test_client().post(f"/api/project/{ids['first']}/like", json={'type': 'love'})
        assert resp.status_code == 401

    def test_add_like(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'love'})
        assert resp.status_code == 200
        assert resp.get_json() == {'totalLikeCount': 1, 'activeLikeTypes': ['love']}

    def test_add_second_type_and_repeat(self, liker_client, ids):
        liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'thumbs_up'})
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'love', 'action': 'add'})
        assert resp.get_json() == {'totalLikeCount': 2, 'activeLikeTypes': ['thumbs_up', 'love']}

    def test_numeric_type(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 4})
        assert resp.get_json()['activeLikeTypes'] == ['thumbs_up', 'love', 'wow']

    def test_remove_like(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'love', 'action': 'remove'})
        assert resp.status_code == 200
        assert resp.get_json() == {'totalLikeCount': 2, 'activeLikeTypes': ['thumbs_up', 'wow']}

    def test_invalid_type(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'angry'})
        assert resp.status_code == 400

    def test_invalid_action(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json={'type': 'love', 'action': 'toggle'})
        assert resp.status_code == 400

    def test_non_object_body_uses_defaults(self, liker_client, ids):
        resp = liker_client.post(f"/api/project/{ids['first']}/like", json=['love'])
        assert resp.status_code == 200
        assert resp.get_json() == {'totalLikeCount': 2, 'activeLikeTypes': ['thumbs_up', 'wow']}

    def test_unknown_program(self, liker_client):
        resp = liker_client.post('/api/project/missing/like', json={'type': 'love'})
        assert resp.status_code == 404

    def test_public_counts(self, app, ids):
        resp = app.test_client().get(f"/api/project/{ids['first']}/likes")
        assert resp.status_code == 200
        assert resp.get_json() == {
            'total': 2,
            'types': {'thumbs_up': 1, 'smile': 0, 'love': 0, 'wow': 1},
        }
