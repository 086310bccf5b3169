"""
Repositories package - query helpers that go beyond a single model lookup.
"""

from .scratch_remix import ScratchProgramRemixRepository
from .program_like import ProgramLikeRepository

__all__ = ['ScratchProgramRemixRepository', 'ProgramLikeRepository']
