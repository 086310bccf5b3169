"""
Configuration Module for the Catroweb backend.
Centralizes all app settings with environment variable support.
"""

import hashlib
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _dir_from_env(name, default):
    value = os.getenv(name, '').strip()
    return Path(value).expanduser() if value else default


class Config:
    """Application configuration with sensible defaults."""

    # Paths
    BASE_DIR = Path(__file__).parent.parent
    DATABASE_PATH = BASE_DIR / 'data.db'
    LOG_DIR = _dir_from_env('CATROWEB_LOG_DIR', BASE_DIR / 'var' / 'log')
    MEDIA_PACKAGE_DIR = _dir_from_env('CATROWEB_MEDIA_DIR', BASE_DIR / 'resources' / 'mediapackage')
    PROGRAM_DIR = _dir_from_env('CATROWEB_PROGRAM_DIR', BASE_DIR / 'resources' / 'programs')
    EXTRACT_DIR = _dir_from_env('CATROWEB_EXTRACT_DIR', BASE_DIR / 'resources' / 'extract')

    # Flask — stable fallback key derived from the DB path so it survives restarts
    _fallback_key = hashlib.sha256(
        f'catroweb-secret-{Path(__file__).parent.parent / "data.db"}'.encode()
    ).hexdigest()
    SECRET_KEY = os.getenv('SECRET_KEY', _fallback_key)
    DEBUG = os.getenv('FLASK_DEBUG', 'true').lower() == 'true'

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URL', f'sqlite:///{DATABASE_PATH}')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_FILE_NAME = 'catroweb.log'

    # Uploads
    MAX_UPLOAD_MB = int(os.getenv('MAX_UPLOAD_MB', '100'))

    def ensure_dirs(self):
        """Ensure required directories exist."""
        for path in (self.LOG_DIR, self.MEDIA_PACKAGE_DIR, self.PROGRAM_DIR, self.EXTRACT_DIR):
            Path(path).mkdir(parents=True, exist_ok=True)


# Create default instance
config = Config()
