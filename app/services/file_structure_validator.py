"""
Structure check for an unpacked program archive.

A program may only contain its code.xml, the screenshots and the
sounds/images folders. Anything else is rejected before the program is
stored.
"""

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path

from app.exceptions import InvalidCatrobatFileError

logger = logging.getLogger(__name__)


class ExtractedCatrobatFile:
    """An unpacked .catrobat archive on disk."""

    CODE_XML = 'code.xml'

    def __init__(self, path):
        self.path = Path(path)

    def __repr__(self):
        return f'ExtractedCatrobatFile({str(self.path)!r})'

    @property
    def code_xml_path(self):
        return self.path / self.CODE_XML

    def has_code_xml(self):
        return self.code_xml_path.is_file()

    def _header_value(self, tag):
        try:
            root = ET.parse(self.code_xml_path).getroot()
        except (ET.ParseError, OSError):
            return None
        node = root.find(f'header/{tag}')
        if node is None or node.text is None:
            return None
        return node.text.strip() or None

    def get_name(self):
        """Program name from the code.xml header, if present."""
        return self._header_value('programName')

    def get_description(self):
        return self._header_value('description')


class FileStructureValidator:
    """Whitelist check on the entries of an extracted program."""

    ALLOWED_DIRECTORIES = frozenset(['sounds', 'images'])
    ALLOWED_FILES = frozenset([
        'code.xml',
        'screenshot.png',
        'manual_screenshot.png',
        'automatic_screenshot.png',
    ])

    def on_program_before_insert(self, extracted_file):
        self.validate(extracted_file)

    def find_unexpected_entries(self, path):
        """Relative paths ('/'-separated, sorted) of every entry not on the whitelist."""
        root = Path(path)
        unexpected = []
        for current, dirs, files in os.walk(root):
            # Skip whitelisted folders wherever they appear
            dirs[:] = [d for d in dirs if d not in self.ALLOWED_DIRECTORIES]
            rel_dir = Path(current).relative_to(root)
            for name in dirs:
                unexpected.append((rel_dir / name).as_posix())
            for name in files:
                rel = (rel_dir / name).as_posix()
                if rel in self.ALLOWED_FILES:
                    continue
                unexpected.append(rel)
        return sorted(unexpected)

    def validate(self, extracted_file):
        """
        Raise InvalidCatrobatFileError if the archive contains unexpected entries.

        Args:
            extracted_file: ExtractedCatrobatFile or a directory path
        """
        path = extracted_file.path if isinstance(extracted_file, ExtractedCatrobatFile) else Path(extracted_file)
        unexpected = self.find_unexpected_entries(path)
        if unexpected:
            logger.warning("Rejected program archive at %s: %s", path, unexpected)
            raise InvalidCatrobatFileError(
                'unexpected files found: ' + ', '.join(unexpected),
                unexpected_files=unexpected,
            )
