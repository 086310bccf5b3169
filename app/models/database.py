"""
Database initialization and SQLAlchemy instance.
"""

import uuid

from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()


def new_guid():
    """Generate a GUID primary key."""
    return str(uuid.uuid4())


def init_db(app):
    """Initialize database with Flask app."""
    db.init_app(app)

    with app.app_context():
        # Import models to register them
        from . import user, program, program_like, scratch_remix, media_package

        # Create all tables
        db.create_all()
