"""
Routes package for the Catroweb backend.
Blueprints are registered in create_app().
"""

from .likes import bp as likes_bp
from .media import bp as media_bp
from .remixes import bp as remixes_bp
from .upload import bp as upload_bp
from .users import bp as users_bp

__all__ = ['likes_bp', 'media_bp', 'remixes_bp', 'upload_bp', 'users_bp']
