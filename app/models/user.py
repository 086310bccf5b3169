"""
User model for authentication and role-based access control.
"""

from datetime import datetime

from flask_login import UserMixin
from werkzeug.security import generate_password_hash, check_password_hash

from .database import db, new_guid


class User(UserMixin, db.Model):
    """Community member who uploads and reacts to programs."""

    __tablename__ = 'users'

    # Usernames of accounts imported from Scratch carry this prefix
    SCRATCH_PREFIX = 'Scratch:'

    ROLE_USER = 'user'
    ROLE_ADMIN = 'admin'
    ROLE_SUPER_ADMIN = 'super_admin'
    ROLES = (ROLE_USER, ROLE_ADMIN, ROLE_SUPER_ADMIN)

    id = db.Column(db.String(36), primary_key=True, default=new_guid)
    username = db.Column(db.String(180), nullable=False, unique=True, index=True)
    email = db.Column(db.String(180), nullable=False, unique=True, index=True)
    password_hash = db.Column(db.String(255), nullable=True)
    enabled = db.Column(db.Boolean, nullable=False, default=False)
    upload_token = db.Column(db.String(64), nullable=True)
    role = db.Column(db.String(20), nullable=False, default=ROLE_USER)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    last_login_at = db.Column(db.DateTime, nullable=True)

    programs = db.relationship('Program', back_populates='user', lazy='dynamic')

    @property
    def is_active(self):
        return bool(self.enabled)

    @property
    def is_admin(self):
        return self.role in (self.ROLE_ADMIN, self.ROLE_SUPER_ADMIN)

    @property
    def is_super_admin(self):
        return self.role == self.ROLE_SUPER_ADMIN

    def has_role(self, role):
        return self.role == role

    def set_password(self, password):
        """Hash and store password."""
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        """Verify password against stored hash."""
        if not self.password_hash:
            return False
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        """Serialize user for API responses. Never expose password_hash or upload_token."""
        return {
            'id': self.id,
            'username': self.username,
            'email': self.email,
            'role': self.role,
            'enabled': self.enabled,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'last_login_at': self.last_login_at.isoformat() if self.last_login_at else None,
        }
