"""models.py
Holds standardized data models used across various functions.
"""
from typing import List, Dict, Any
from dataclasses import dataclass, field, asdict

# Canonical sections reported by the structure checker (fixed key set)
STRUCTURE_SECTIONS = ("experience", "education", "skills", "contact")

# Section name -> whether it was detected in the resume
StructureReport = Dict[str, bool]


@dataclass
class TextChunk:
    """
    Represents a single bounded slice of a document's text.
    Typically stored in a list to preserve the order of chunks.

    Attributes:
        chunk_index (int): Index of the chunk within the document,
            counting sequentially. Starts at 1.
        text (str): Text content of the chunk.
        source_offset (int): Character offset of `text` within the original document.
    """
    chunk_index: int
    text: str
    source_offset: int = 0


@dataclass
class MatchScore:
    """
    Best similarity of one resume chunk against any job-description chunk.

    Attributes:
        text (str): The resume chunk text.
        score (float): Maximum cosine similarity, in [-1, 1].
    """
    text: str
    score: float


@dataclass
class SemanticAnalysis:
    """Output of the SimilarityEngine. Defaults are the neutral fallback."""
    overall_similarity: float = 0.0
    best_matches: List[MatchScore] = field(default_factory=list)
    weak_matches: List[MatchScore] = field(default_factory=list)


@dataclass
class ExperienceProfile:
    """
    Summarized work history.

    Attributes:
        years (float): Total years of experience, never negative.
        titles (List[str]): Job titles, most recent first.
        achievements (List[str]): Notable achievements.
    """
    years: float = 0
    titles: List[Any] = field(default_factory=list)
    achievements: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Suggestion:
    """One categorized improvement item. Both fields are non-empty."""
    category: str
    suggestion: str


@dataclass
class AnalysisResult:
    """
    Aggregate output of one resume/job-description analysis.

    `to_dict()` produces the flat record returned to callers.
    """
    ats_score: int
    suggestions: List[Suggestion]
    semantic_similarity: float
    best_matching_sections: List[MatchScore]
    sections_needing_improvement: List[MatchScore]
    keyword_match: List[str]
    missing_keywords: List[str]
    structure: StructureReport
    format_issues: List[str]
    experience: ExperienceProfile

    def to_dict(self) -> Dict[str, Any]:
        """Serialize into the camelCase record shared with API clients."""
        return {
            "atsScore": self.ats_score,
            "suggestions": [asdict(s) for s in self.suggestions],
            "semanticSimilarity": self.semantic_similarity,
            "bestMatchingSections": [asdict(m) for m in self.best_matching_sections],
            "sectionsNeedingImprovement": [asdict(m) for m in self.sections_needing_improvement],
            "keywordMatch": list(self.keyword_match),
            "missingKeywords": list(self.missing_keywords),
            "structure": dict(self.structure),
            "formatIssues": list(self.format_issues),
            "experience": self.experience.to_dict(),
        }
