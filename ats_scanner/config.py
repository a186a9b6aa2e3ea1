"""config.py
Holds various defaults for different resume scanner settings.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass(frozen=True)
class ScoreWeights:
    """
    Weights applied to each sub-score when composing the ATS score.
    Must sum to 1.0.
    """
    semantic_match: float = 0.35
    keywords: float = 0.25
    structure: float = 0.20
    experience: float = 0.20

    @property
    def total(self) -> float:
        return self.semantic_match + self.keywords + self.structure + self.experience

    def __post_init__(self):
        if not math.isclose(self.total, 1.0):
            raise ValueError(f"Score weights must sum to 1.0, got {self.total}")


@dataclass(frozen=True)
class ScannerConfig:
    """
    Settings for parameters used across the resume_ats_scanner repo.

    Instances are immutable. Components receive one at construction and never
    read module-level state beyond `SCANNER_DEFAULTS` as a default argument.
    """
    # ---- Chunker settings ----
    CHUNK_SIZE: int = field(
        default = 1000,
        metadata = {
            "description": "Maximum size of each chunk in characters"
    })
    CHUNK_OVERLAP: int = field(
        default = 200,
        metadata = {
            "description": "Characters shared between consecutive chunks"
    })

    # ---- FileParser settings ----
    MAX_FILE_SIZE_MB: float = field(
        default = 5.0,
        metadata = {
            "description": "Maximum allowed file size in MB"
    })

    # ---- ResumeAnalyzer settings ----
    MAX_THREADS: int = field(
        default = 2,
        metadata = {
            "description": "Maximum number of threads used for independent capability calls"
    })

    # ---- LLMClient settings ----
    LLM_PROVIDER: str = field(
        default = "anthropic",
        metadata = {
            "description": 'LLM provider: "anthropic"'
    })
    ANTHROPIC_MODEL_ID: str = field(
        default = "claude-haiku-4-5",
        metadata = {
            "description": "Anthropic model ID"
    })
    LLM_TEMPERATURE: float = field(
        default = 0.1,
        metadata = {
            "description": "Low temperature keeps generated analysis stable between runs"
    })

    # ---- EmbeddingClient settings ----
    EMBEDDING_PROVIDER: str = field(
        default = "huggingface",
        metadata = {
            "description": 'Embedding provider: "huggingface"'
    })
    HF_EMBEDDING_MODEL_ID: str = field(
        default = "sentence-transformers/all-MiniLM-L6-v2",
        metadata = {
            "description": "HuggingFace sentence-transformers model used for embeddings"
    })
    EMBEDDING_DEVICE: str = field(
        default = "cpu",
        metadata = {
            "description": "Torch device the embedding model runs on"
    })

    # ---- Keyword matching settings ----
    SKILL_VOCABULARY: Tuple[str, ...] = field(
        default = (
            "javascript",
            "python",
            "java",
            "reactjs",
            "node.js",
            "c++",
            "c",
            "mongodb",
            "sql",
            "aws",
            "docker",
            "kubernetes",
            "machine learning",
            "data analysis",
            "agile",
            "project management",
            "leadership",
            "communication",
            "problem solving",
        ),
        metadata = {
            "description": "Controlled vocabulary of recognized skills (matched as substrings)"
    })

    # ---- Structure checker settings ----
    SECTION_PATTERNS: Tuple[Tuple[str, str], ...] = field(
        default = (
            ("experience", r"experience|work history|employment"),
            ("education", r"education|academic|qualification"),
            ("skills", r"skills|technical skills|competencies"),
            ("contact", r"contact|email|phone|address"),
        ),
        metadata = {
            "description": "Canonical resume sections and the regex that detects each one"
    })

    # ---- Scoring settings ----
    SCORE_WEIGHTS: ScoreWeights = field(
        default_factory = ScoreWeights,
        metadata = {
            "description": "Weights of the semantic, keyword, structure and experience sub-scores"
    })
    TOP_MATCH_COUNT: int = field(
        default = 3,
        metadata = {
            "description": "Number of best and weakest matching resume chunks reported"
    })

    # ---- Format checker / suggestion settings ----
    MAX_RESUME_LENGTH: int = field(
        default = 10000,
        metadata = {
            "description": "Resumes longer than this (in characters) are flagged as too long"
    })
    WEAK_MATCH_PREVIEW_CHARS: int = field(
        default = 100,
        metadata = {
            "description": "Characters of each weak match passed to the suggestion prompt"
    })


# Import this where needed
SCANNER_DEFAULTS = ScannerConfig()
