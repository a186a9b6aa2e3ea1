"""suggestion_generator.py
Turns the aggregated analysis into categorized, actionable resume suggestions.
"""
import json
from dataclasses import dataclass, field
from typing import Any, List, Optional

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.logging import get_fallback_logger
from ats_scanner.models import ExperienceProfile, MatchScore, StructureReport, Suggestion
from ats_scanner.analyzers.score_composer import round_half_up
from ats_scanner.analyzers.structure_checker import missing_sections
from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.helper_functions.llm.llm_helpers import initialize_llm_if_needed
from ats_scanner.helper_functions.llm.structured_output import (
    clean_llm_response,
    try_parse_structured,
)

fallback_logger = get_fallback_logger()

SUGGESTION_SYSTEM_PROMPT = (
    "You are an expert resume analyzer. Your task is to provide improvement suggestions "
    "based on resume analysis.\n"
    "You must respond with ONLY a JSON array of objects. Each object must have exactly "
    "these fields:\n"
    "- \"category\": The category of the suggestion (e.g., \"Keywords\", \"Structure\", "
    "\"Experience\", \"Formatting\")\n"
    "- \"suggestion\": A specific, actionable suggestion\n\n"
    "Do not include any other text, tags, or formatting in your response. Only the JSON array."
)

SUGGESTION_USER_PROMPT = (
    "Please analyze this resume data and provide suggestions:\n\n"
    "Semantic Match: {semantic_score}%\n"
    "Matching Keywords: {matching_keywords}\n"
    "Missing Keywords: {missing_keywords}\n"
    "Structure Issues: {structure_issues}\n"
    "Format Issues: {format_issues}\n"
    "Experience: {experience}\n"
    "Job Description: {job_description}\n\n"
    "Weak Areas:\n"
    "{weak_matches}"
)


def get_default_suggestions() -> List[Suggestion]:
    """Generic suggestions returned whenever the model output cannot be used."""
    return [
        Suggestion(
            category="Keywords",
            suggestion="Add missing keywords to improve ATS compatibility",
        ),
        Suggestion(
            category="Structure",
            suggestion="Ensure all core resume sections are present (Contact, Experience, Education, Skills)",
        ),
        Suggestion(
            category="Formatting",
            suggestion="Review formatting for consistency and readability",
        ),
        Suggestion(
            category="Experience",
            suggestion="Include quantifiable achievements in experience section",
        ),
    ]


@dataclass
class SuggestionContext:
    """Everything the suggestion prompt is built from."""
    semantic_similarity: float = 0.0
    matching_keywords: List[str] = field(default_factory=list)
    missing_keywords: List[str] = field(default_factory=list)
    structure: StructureReport = field(default_factory=dict)
    format_issues: List[str] = field(default_factory=list)
    experience: ExperienceProfile = field(default_factory=ExperienceProfile)
    job_description: str = ""
    weak_matches: List[MatchScore] = field(default_factory=list)


def _join_or_none(values: List[str]) -> str:
    return ", ".join(values) if values else "None"


def validate_suggestions(parsed: Any) -> Optional[List[Suggestion]]:
    """
    Return Suggestions when `parsed` is a non-empty list of objects that each carry
    a non-empty string `category` and `suggestion`, otherwise None.
    """
    if not isinstance(parsed, list) or not parsed:
        return None

    suggestions = []
    for item in parsed:
        if not isinstance(item, dict):
            return None
        category = item.get("category")
        suggestion = item.get("suggestion")
        if not isinstance(category, str) or not isinstance(suggestion, str):
            return None
        if not category.strip() or not suggestion.strip():
            return None
        suggestions.append(Suggestion(category=category.strip(), suggestion=suggestion.strip()))
    return suggestions


class SuggestionGenerator:
    """
    Asks the generative model for improvement suggestions and validates the answer.

    `generate()` never raises and never returns an empty list: when the query fails
    or the response holds no valid suggestion array, the four default suggestions
    (Keywords, Structure, Formatting, Experience) are returned instead.
    """

    FUNCTION_NAME = "generate_suggestions"

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        config: ScannerConfig = SCANNER_DEFAULTS,
    ):
        self.llm_client = llm_client
        self.config = config

    def build_user_prompt(self, context: SuggestionContext) -> str:
        preview_chars = self.config.WEAK_MATCH_PREVIEW_CHARS
        weak_matches = "\n".join(
            match.text[:preview_chars] for match in context.weak_matches
        )
        return SUGGESTION_USER_PROMPT.format(
            semantic_score=round_half_up(context.semantic_similarity * 100) if context.semantic_similarity else 0,
            matching_keywords=_join_or_none(context.matching_keywords),
            missing_keywords=_join_or_none(context.missing_keywords),
            structure_issues=_join_or_none(missing_sections(context.structure)),
            format_issues=_join_or_none(context.format_issues),
            experience=json.dumps(context.experience.to_dict()),
            job_description=context.job_description or "No job description provided",
            weak_matches=weak_matches or "None",
        )

    def generate(self, context: SuggestionContext) -> List[Suggestion]:
        try:
            self.llm_client = initialize_llm_if_needed(
                llm_client=self.llm_client,
                function_name=self.FUNCTION_NAME,
                config=self.config,
            )
            response = self.llm_client.query(
                system_prompt=SUGGESTION_SYSTEM_PROMPT,
                user_prompt=self.build_user_prompt(context),
            )
        except Exception as e:
            fallback_logger.warning(f"Suggestion query failed, using default suggestions: {e}")
            return get_default_suggestions()

        cleaned_response = clean_llm_response(response)
        parsed = try_parse_structured(cleaned_response, "array")
        if parsed is None:
            fallback_logger.warning(f"No JSON array found in suggestion response: `{cleaned_response[:200]}`")
            return get_default_suggestions()

        suggestions = validate_suggestions(parsed)
        if suggestions is None:
            fallback_logger.warning(f"Invalid suggestions format: `{parsed}`")
            return get_default_suggestions()

        return suggestions
