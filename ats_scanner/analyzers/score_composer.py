"""score_composer.py
Combines the analysis signals into a single 0-100 ATS score.
"""
import math
from typing import List

from ats_scanner.config import SCANNER_DEFAULTS, ScoreWeights
from ats_scanner.models import StructureReport

def semantic_score(overall_similarity: float) -> float:
    # Cosine can be negative; no clamping before weighting
    return overall_similarity * 100


def keyword_score(matching_keywords: List[str], missing_keywords: List[str]) -> float:
    total_keywords = len(matching_keywords) + len(missing_keywords)
    if total_keywords == 0:
        return 0.0
    return len(matching_keywords) / total_keywords * 100


def structure_score(structure: StructureReport) -> float:
    if not structure:
        return 0.0
    return sum(1 for present in structure.values() if present) / len(structure) * 100


def experience_score(years: float) -> float:
    return min((years or 0) * 10, 100)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_ats_score(
    overall_similarity: float,
    matching_keywords: List[str],
    missing_keywords: List[str],
    structure: StructureReport,
    experience_years: float,
    weights: ScoreWeights = SCANNER_DEFAULTS.SCORE_WEIGHTS,
) -> int:
    """
    Weighted composite of the four sub-scores, each on a 0-100 scale.

    Sub-scores:
        - semantic: overall similarity x 100
        - keywords: matching / (matching + missing) x 100, 0 when there are no keywords
        - structure: share of detected sections x 100
        - experience: years x 10, capped at 100

    The weighted sum is rounded half-up and clamped to [0, 100]. Without the clamp a
    negative cosine similarity could push the composite below zero.

    Returns:
        int: ATS score in [0, 100].
    """
    weighted_sum = (
        semantic_score(overall_similarity) * weights.semantic_match
        + keyword_score(matching_keywords, missing_keywords) * weights.keywords
        + structure_score(structure) * weights.structure
        + experience_score(experience_years) * weights.experience
    )
    return max(0, min(100, round_half_up(weighted_sum)))
