"""format_checker.py
Flags formatting problems that hurt ATS parsing.
"""
from typing import List

from ats_scanner.config import SCANNER_DEFAULTS

REPLACEMENT_CHARACTER = "\ufffd"

def detect_format_issues(
    text: str,
    max_length: int = SCANNER_DEFAULTS.MAX_RESUME_LENGTH,
) -> List[str]:
    """
    Return human-readable format issues found in the resume text.

    - "Contains special characters": the text holds U+FFFD, left behind when
      the source document had bytes that could not be decoded.
    - "Resume might be too long": the text is longer than `max_length` characters.
    """
    issues = []
    if REPLACEMENT_CHARACTER in text:
        issues.append("Contains special characters")
    if len(text) > max_length:
        issues.append("Resume might be too long")
    return issues
