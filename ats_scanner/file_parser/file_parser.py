"""file_parser.py

Holds abstract FileParser class inherited by filetype-specific parsers.
"""

import os
from abc import ABC, abstractmethod

from ats_scanner.config import SCANNER_DEFAULTS
from ats_scanner.exceptions import (
    FileTooLargeError,
    FileEmptyError,
    NoFilePathError,
    ResumeFileNotFoundError,
)

from ats_scanner.file_parser.helpers.check_file_extension import check_file_extension

BYTES_PER_MB = 1024 * 1024


class FileParser(ABC):
    """
    Base class for reading the text out of an uploaded resume.

    The constructor checks that the file exists, fits under `max_file_size_mb`
    (None disables the limit) and carries one of the subclass's
    `SUPPORTED_EXTENSIONS`. Subclasses implement `_read_raw_text()`; callers use
    `extract_text()`, which also rejects documents with no readable content.
    """
    SUPPORTED_EXTENSIONS = []

    def __init__(
        self,
        file_path: str,
        max_file_size_mb: float | None = SCANNER_DEFAULTS.MAX_FILE_SIZE_MB
    ):
        if not file_path:
            raise NoFilePathError()
        self.file_path = str(file_path)
        self.max_file_size_mb = max_file_size_mb

        if not os.path.exists(self.file_path):
            raise ResumeFileNotFoundError(self.file_path)
        self._check_size()
        check_file_extension(self.file_path, self.SUPPORTED_EXTENSIONS)

    def _check_size(self):
        if self.max_file_size_mb is None:
            return
        limit = self.max_file_size_mb * BYTES_PER_MB
        size = os.path.getsize(self.file_path)
        if size > limit:
            raise FileTooLargeError(max_size=limit, actual_size=size)

    def extract_text(self) -> str:
        """
        Return the decoded text of the document.

        Raises:
            FileOpenError: If the file cannot be opened or decoded.
            FileEmptyError: If the document is empty or whitespace-only.
        """
        text = self._read_raw_text()
        if not text or text.isspace():
            raise FileEmptyError(self.file_path)
        return text

    @abstractmethod
    def _read_raw_text(self) -> str:
        """Open `self.file_path` and return its raw text."""
        pass
