"""pdf_parser.py

Holds PDFParser class.
"""
import pymupdf

from ats_scanner.exceptions import FileOpenError
from ats_scanner.file_parser.file_parser import FileParser


class PDFParser(FileParser):
    """
    Reads the text layer of a PDF resume with PyMuPDF.

    Scanned PDFs without a text layer come back blank, which `extract_text()`
    reports as a FileEmptyError.
    """
    SUPPORTED_EXTENSIONS = ['.pdf']

    def _read_raw_text(self) -> str:
        """Text of every page in order, joined with a single space."""
        try:
            with pymupdf.open(self.file_path) as doc:
                return " ".join(page.get_text("text") for page in doc)
        except Exception as e:
            raise FileOpenError(self.file_path, str(e))
