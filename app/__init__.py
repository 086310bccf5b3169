"""
Catroweb - Pocket Code community backend

Flask application factory and initialization.
"""

import logging
import os

from flask import Flask, jsonify
from config import config

logger = logging.getLogger(__name__)


def _bootstrap_admin(app):
    """Create initial super-admin account from env vars if no users exist."""
    admin_username = os.getenv('CATROWEB_ADMIN_USERNAME', 'admin')
    admin_email = os.getenv('CATROWEB_ADMIN_EMAIL')
    admin_password = os.getenv('CATROWEB_ADMIN_PASSWORD')

    with app.app_context():
        from app.models import db, User
        from app.services.registration import generate_upload_token

        if User.query.count() > 0:
            return

        if not admin_email or not admin_password:
            logger.warning(
                "No users exist and CATROWEB_ADMIN_EMAIL/CATROWEB_ADMIN_PASSWORD not set; "
                "set them and restart to create the admin account."
            )
            return

        admin = User(
            username=admin_username.strip(),
            email=admin_email.lower().strip(),
            role=User.ROLE_SUPER_ADMIN,
            enabled=True,
            upload_token=generate_upload_token(),
        )
        admin.set_password(admin_password)
        db.session.add(admin)
        db.session.commit()
        logger.info("Super admin account created for %s", admin.username)


def _register_error_handlers(app):
    from app.exceptions import InvalidArchiveError, InvalidCatrobatFileError
    from app.status_codes import StatusCode

    @app.errorhandler(InvalidCatrobatFileError)
    @app.errorhandler(InvalidArchiveError)
    def invalid_program_file(error):
        return jsonify({'error': str(error), 'statusCode': StatusCode.INVALID_FILE}), 422


def create_app(testing=False):
    """Create and configure the Flask application."""

    app = Flask(__name__)

    app.config['TESTING'] = testing

    # Configuration
    app.config['SECRET_KEY'] = os.getenv('SECRET_KEY', config.SECRET_KEY)
    app.config['SQLALCHEMY_DATABASE_URI'] = config.SQLALCHEMY_DATABASE_URI
    app.config['SQLALCHEMY_TRACK_MODIFICATIONS'] = False
    app.config['LOG_DIR'] = str(config.LOG_DIR)
    app.config['MEDIA_PACKAGE_DIR'] = str(config.MEDIA_PACKAGE_DIR)
    app.config['PROGRAM_DIR'] = str(config.PROGRAM_DIR)
    app.config['EXTRACT_DIR'] = str(config.EXTRACT_DIR)
    app.config['MAX_CONTENT_LENGTH'] = config.MAX_UPLOAD_MB * 1024 * 1024

    # Session cookie security
    app.config['SESSION_COOKIE_HTTPONLY'] = True
    app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
    app.config['SESSION_COOKIE_SECURE'] = os.getenv('FLASK_ENV') == 'production'

    # Ensure directories exist
    config.ensure_dirs()

    from app.logging_setup import setup_logging
    setup_logging(config.LOG_DIR, level=config.LOG_LEVEL,
                  file_name=config.LOG_FILE_NAME, testing=testing)

    # Initialize database
    from app.models import init_db
    init_db(app)

    # Initialize authentication
    from app.auth import init_auth
    init_auth(app)

    # Initialize rate limiter
    from app.limiter import limiter
    if app.config.get('TESTING'):
        app.config['RATELIMIT_ENABLED'] = False
    limiter.init_app(app)

    _register_error_handlers(app)

    # Bootstrap admin on first run
    _bootstrap_admin(app)

    # Register blueprints
    from app.auth.routes import bp as auth_bp
    from app.admin.routes import bp as admin_bp
    from app.routes.media import bp as media_bp
    from app.routes.users import bp as users_bp
    from app.routes.likes import bp as likes_bp
    from app.routes.remixes import bp as remixes_bp
    from app.routes.upload import bp as upload_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(media_bp)
    app.register_blueprint(users_bp, url_prefix='/api')
    app.register_blueprint(likes_bp, url_prefix='/api')
    app.register_blueprint(remixes_bp, url_prefix='/api')
    app.register_blueprint(upload_bp, url_prefix='/api')

    # Default-deny: require auth on all routes except explicit allowlist
    PUBLIC_ENDPOINTS = {
        'auth.login',
        'media.media_library',
        'media.list_categories',
        'media.files_for_category',
        'media.files_for_package',
        'media.files_for_package_by_name_url',
        'media.files_for_package_and_category',
        'media.single_file',
        'media.download_media_file',
        'users.register',
        'users.get_user',
        'users.search_users',
        'likes.program_likes',
        'remixes.scratch_remix_parents',
        'static',
    }

    @app.before_request
    def require_auth():
        from flask import request as req
        from flask_login import current_user as cu

        endpoint = req.endpoint
        if endpoint is None:
            return
        if endpoint in PUBLIC_ENDPOINTS:
            return
        if cu.is_authenticated:
            return
        return jsonify({'error': 'Authentication required'}), 401

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-XSS-Protection'] = '1; mode=block'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        return response

    return app


__all__ = ['create_app']
