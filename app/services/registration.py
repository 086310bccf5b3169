"""
User registration - field validation and account creation.

Each field is checked independently; the first failing rule of a field
decides its message, so a response carries at most one error per field.
"""

import logging
import re
import secrets

from app.models import db, User

logger = logging.getLogger(__name__)

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 180
PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_LENGTH = 4096

MESSAGES = {
    'email_missing': 'Email missing',
    'email_invalid': 'Email invalid',
    'email_in_use': 'Email already in use',
    'username_missing': 'Username missing',
    'username_too_short': 'Username too short',
    'username_too_long': 'Username too long',
    'username_contains_email': "Username shouldn't contain an email address",
    'username_in_use': 'Username already in use',
    'username_invalid': 'Username invalid',
    'password_missing': 'Password missing',
    'password_too_short': 'Password too short',
    'password_too_long': 'Password too long',
    'password_invalid_chars': 'Password contains invalid characters',
}

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def is_valid_email(email):
    """Basic email format validation."""
    return bool(_EMAIL_RE.match(email or ''))


def _byte_length(value):
    return len(value.encode('utf-8'))


def generate_upload_token():
    """Random token used by the apps to authenticate uploads."""
    return secrets.token_hex(16)


def _validate_email(email):
    if len(email) == 0:
        return MESSAGES['email_missing']
    if not is_valid_email(email):
        return MESSAGES['email_invalid']
    if User.query.filter(db.func.lower(User.email) == email.lower()).first():
        return MESSAGES['email_in_use']
    return None


def _validate_username(username):
    if len(username) == 0:
        return MESSAGES['username_missing']
    if _byte_length(username) < USERNAME_MIN_LENGTH:
        return MESSAGES['username_too_short']
    if _byte_length(username) > USERNAME_MAX_LENGTH:
        return MESSAGES['username_too_long']
    if is_valid_email(username.replace(' ', '')):
        return MESSAGES['username_contains_email']
    if User.query.filter_by(username=username).first():
        return MESSAGES['username_in_use']
    if username.lower().startswith(User.SCRATCH_PREFIX.lower()):
        return MESSAGES['username_invalid']
    return None


def _validate_password(password):
    if len(password) == 0:
        return MESSAGES['password_missing']
    if _byte_length(password) < PASSWORD_MIN_LENGTH:
        return MESSAGES['password_too_short']
    if _byte_length(password) > PASSWORD_MAX_LENGTH:
        return MESSAGES['password_too_long']
    if not password.isascii():
        return MESSAGES['password_invalid_chars']
    return None


def validate_registration(email, username, password):
    """
    Validate a registration request.

    Args:
        email: Requested email address
        username: Requested username
        password: Plain password

    Returns:
        Dict of field -> error message, containing only failing fields.
        An empty dict means the registration is valid.
    """
    errors = {
        'email': _validate_email(email or ''),
        'username': _validate_username(username or ''),
        'password': _validate_password(password or ''),
    }
    return {field: message for field, message in errors.items() if message}


def register_user(email, username, password):
    """Create an enabled user with a fresh upload token."""
    user = User(
        username=username,
        email=email.lower(),
        enabled=True,
        role=User.ROLE_USER,
        upload_token=generate_upload_token(),
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s (%s)", user.username, user.id)
    return user
