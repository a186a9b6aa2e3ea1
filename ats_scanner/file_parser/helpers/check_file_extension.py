"""check_file_extension.py
Resolves a resume file's extension against the extensions a parser accepts.
"""
import os

from ats_scanner.exceptions import FileNotSupportedError


def check_file_extension(file_path: str, supported_extensions: list[str]) -> str:
    """
    Return the lowercase extension of `file_path` if it is supported.

    Only the final suffix counts, so `resume.v1.docx` resolves to `.docx`.

    Raises:
        FileNotSupportedError: If the suffix is missing or not in `supported_extensions`.
    """
    extension = os.path.splitext(os.path.basename(str(file_path)))[1].lower()
    if extension and extension in {ext.lower() for ext in supported_extensions}:
        return extension

    raise FileNotSupportedError(
        extension=extension,
        supported_extensions=supported_extensions,
        context=f"Resume file: {os.path.basename(str(file_path))}"
    )
