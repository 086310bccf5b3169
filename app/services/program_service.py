"""
Program upload - extract, validate and store a .catrobat archive.
"""

import logging
import shutil
import tempfile
import zipfile
from pathlib import Path

from app.exceptions import InvalidArchiveError
from app.models import db, Program
from .file_structure_validator import ExtractedCatrobatFile, FileStructureValidator

logger = logging.getLogger(__name__)


class ProgramService:
    """Turns an uploaded archive into a stored Program."""

    def __init__(self, extract_dir, program_dir, validators=None):
        self.extract_dir = Path(extract_dir)
        self.program_dir = Path(program_dir)
        self.validators = validators if validators is not None else [FileStructureValidator()]

    def _extract(self, archive_path, target):
        try:
            with zipfile.ZipFile(archive_path) as archive:
                for member in archive.namelist():
                    destination = (target / member).resolve()
                    if destination != target and target not in destination.parents:
                        raise InvalidArchiveError(f'Unsafe path in archive: {member}', filename=member)
                archive.extractall(target)
        except zipfile.BadZipFile as e:
            raise InvalidArchiveError(f'Not a valid program archive: {e}') from e
        return ExtractedCatrobatFile(target)

    def add_program(self, user, archive_path, name=None):
        """
        Validate the archive at archive_path and store it as a new program.

        Args:
            user: Owner of the program
            archive_path: Path of the uploaded zip file
            name: Optional name; falls back to the code.xml header

        Returns:
            The persisted Program.

        Raises:
            InvalidArchiveError: archive unreadable, unsafe or without code.xml
            InvalidCatrobatFileError: archive contains unexpected files
        """
        self.extract_dir.mkdir(parents=True, exist_ok=True)
        self.program_dir.mkdir(parents=True, exist_ok=True)

        work_dir = Path(tempfile.mkdtemp(dir=self.extract_dir)).resolve()
        try:
            extracted = self._extract(archive_path, work_dir)
            if not extracted.has_code_xml():
                raise InvalidArchiveError('code.xml missing from program archive')

            for validator in self.validators:
                validator.on_program_before_insert(extracted)

            program = Program(
                name=name or extracted.get_name() or 'Untitled',
                description=extracted.get_description() or '',
                user=user,
                filesize=Path(archive_path).stat().st_size,
            )
            db.session.add(program)
            db.session.flush()
            shutil.copyfile(archive_path, self.program_dir / f'{program.id}.catrobat')
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise
        finally:
            shutil.rmtree(work_dir, ignore_errors=True)

        logger.info("User %s uploaded program %s (%s)", user.id, program.id, program.name)
        return program
