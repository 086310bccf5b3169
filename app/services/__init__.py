"""
Services package for the Catroweb backend.
"""

from .registration import validate_registration, register_user, generate_upload_token
from .file_structure_validator import FileStructureValidator, ExtractedCatrobatFile
from .program_service import ProgramService

__all__ = [
    'validate_registration', 'register_user', 'generate_upload_token',
    'FileStructureValidator', 'ExtractedCatrobatFile', 'ProgramService',
]
