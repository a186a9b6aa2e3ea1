"""skills_extractor.py
Detects terms from the controlled skill vocabulary in a document.
"""
from typing import Iterable, List, Tuple

from ats_scanner.config import SCANNER_DEFAULTS

def extract_skills(
    text: str,
    vocabulary: Iterable[str] = SCANNER_DEFAULTS.SKILL_VOCABULARY,
) -> List[str]:
    """
    Return the vocabulary terms that occur anywhere in `text`.

    Matching is a case-insensitive literal substring test with no word-boundary
    check, so "c" matches any text containing the letter c and "java" matches
    "javascript". Downstream scoring only uses how many terms matched.

    Args:
        text (str): Document text.
        vocabulary (Iterable[str]): Controlled vocabulary. Defaults to
            `SCANNER_DEFAULTS.SKILL_VOCABULARY`.

    Returns:
        List[str]: Lowercased matched terms in vocabulary order, without duplicates.
    """
    lowered_text = (text or "").lower()
    skills = []
    for skill in vocabulary:
        normalized = skill.lower()
        if normalized in lowered_text and normalized not in skills:
            skills.append(normalized)
    return skills


def compare_skills(
    resume_skills: List[str],
    job_skills: List[str],
) -> Tuple[List[str], List[str]]:
    """
    Split skills into those the resume shares with the job and those it lacks.

    Returns:
        Tuple[List[str], List[str]]: `(matching, missing)` where `matching` keeps
            resume order and `missing` keeps job-description order.
    """
    job_set = {skill.lower() for skill in job_skills}
    resume_set = {skill.lower() for skill in resume_skills}

    matching = [skill for skill in resume_skills if skill.lower() in job_set]
    missing = [skill for skill in job_skills if skill.lower() not in resume_set]
    return matching, missing
