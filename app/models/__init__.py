"""
Models package for the Catroweb backend.
"""

from .database import db, init_db
from .user import User
from .program import Program
from .program_like import ProgramLike
from .scratch_remix import ScratchProgramRemixRelation
from .media_package import MediaPackage, MediaPackageCategory, MediaPackageFile

__all__ = [
    'db', 'init_db', 'User', 'Program', 'ProgramLike',
    'ScratchProgramRemixRelation', 'MediaPackage', 'MediaPackageCategory',
    'MediaPackageFile',
]
