"""text_file_parser.py

Holds TextFileParser class for plain-text resumes.
"""
from ats_scanner.exceptions import FileOpenError
from ats_scanner.file_parser.file_parser import FileParser


class TextFileParser(FileParser):
    """
    Concrete text extractor for plain-text documents (.txt).

    Bytes that are not valid UTF-8 are decoded to U+FFFD so the format checker
    can flag them instead of the upload failing.
    """

    SUPPORTED_EXTENSIONS = ['.txt']

    def _read_raw_text(self) -> str:
        try:
            with open(self.file_path, "r", encoding="utf-8", errors="replace") as f:
                return f.read()
        except OSError as e:
            raise FileOpenError(self.file_path, str(e))
