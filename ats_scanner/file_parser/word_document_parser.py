"""word_document_parser.py

Holds WordDocumentParser class.
"""
import docx2txt

from ats_scanner.exceptions import FileOpenError
from ats_scanner.file_parser.file_parser import FileParser


class WordDocumentParser(FileParser):
    """Reads .docx resumes with docx2txt, which also picks up text inside textboxes."""

    SUPPORTED_EXTENSIONS = ['.docx']

    def _read_raw_text(self) -> str:
        try:
            return docx2txt.process(self.file_path) or ""
        except Exception as e:
            raise FileOpenError(self.file_path, str(e))
