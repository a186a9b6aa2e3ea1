"""extract_text.py
Selects the FileParser matching a file's extension and returns the document text.
"""
from typing import Dict, Type

from ats_scanner.config import SCANNER_DEFAULTS
from ats_scanner.file_parser.file_parser import FileParser
from ats_scanner.file_parser.pdf_parser import PDFParser
from ats_scanner.file_parser.word_document_parser import WordDocumentParser
from ats_scanner.file_parser.text_file_parser import TextFileParser
from ats_scanner.file_parser.helpers.check_file_extension import check_file_extension

FILETYPE_PARSER_MAP: Dict[str, Type[FileParser]] = {
    ".pdf": PDFParser,
    ".docx": WordDocumentParser,
    ".txt": TextFileParser,
}

def extract_text_from_file(
    file_path: str,
    max_file_size_mb: float | None = SCANNER_DEFAULTS.MAX_FILE_SIZE_MB,
) -> str:
    """
    Extract the decoded text of a PDF, Word (.docx) or plain-text document.

    Args:
        file_path (str): Path to the document.
        max_file_size_mb (float | None): Maximum allowed file size in MB.

    Returns:
        str: The document text.

    Raises:
        FileNotSupportedError: If the extension is not in FILETYPE_PARSER_MAP.
        FileTooLargeError: If the file exceeds `max_file_size_mb`.
        FileOpenError: If the file cannot be read.
        FileEmptyError: If the document holds no readable text.
    """
    ext = check_file_extension(
        file_path=file_path,
        supported_extensions=list(FILETYPE_PARSER_MAP.keys()),
    )
    parser_class = FILETYPE_PARSER_MAP[ext]
    parser = parser_class(file_path=file_path, max_file_size_mb=max_file_size_mb)
    return parser.extract_text()
