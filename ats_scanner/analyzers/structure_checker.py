"""structure_checker.py
Detects which canonical resume sections appear in a document.
"""
import re
from typing import Iterable, Tuple

from ats_scanner.config import SCANNER_DEFAULTS
from ats_scanner.models import STRUCTURE_SECTIONS, StructureReport

def check_resume_structure(
    text: str,
    section_patterns: Iterable[Tuple[str, str]] = SCANNER_DEFAULTS.SECTION_PATTERNS,
) -> StructureReport:
    """
    Test each section pattern (case-insensitive) against the full text.

    Any match anywhere in the document marks the section as present; matches
    are not limited to headings.

    Args:
        text (str): Resume text.
        section_patterns (Iterable[Tuple[str, str]]): `(section_name, regex)` pairs.
            Defaults to the experience/education/skills/contact patterns.

    Returns:
        StructureReport: Every name in `STRUCTURE_SECTIONS` (in that order, False
            when no pattern is given for it), then any extra sections in pattern order.
    """
    text = text or ""
    patterns = dict(section_patterns)
    sections = list(STRUCTURE_SECTIONS) + [s for s in patterns if s not in STRUCTURE_SECTIONS]
    return {
        section: section in patterns and re.search(patterns[section], text, flags=re.IGNORECASE) is not None
        for section in sections
    }


def missing_sections(structure: StructureReport) -> list:
    """Names of the sections that were not detected."""
    return [section for section, present in structure.items() if not present]
