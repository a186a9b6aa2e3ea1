"""experience_extractor.py
Derives years of experience, job titles and achievements from a resume with an LLM.
"""
import math
from typing import Any, Optional

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.logging import get_fallback_logger
from ats_scanner.models import ExperienceProfile
from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.helper_functions.llm.llm_helpers import initialize_llm_if_needed
from ats_scanner.helper_functions.llm.structured_output import try_parse_structured

fallback_logger = get_fallback_logger()

EXPERIENCE_SYSTEM_PROMPT = (
    "You are a resume analyzer. Analyze the resume text you are given and extract "
    "work experience details.\n\n"
    "Return a JSON object containing:\n"
    "- \"years\": Total years of experience as a number\n"
    "- \"titles\": List of job titles from most recent to oldest\n"
    "- \"achievements\": List of notable achievements\n\n"
    "Format the response as a JSON object only, no other text."
)


def _coerce_years(value: Any) -> float:
    """Numeric value (or numeric string) -> non-negative finite float, else 0. Booleans count as 1 and 0."""
    try:
        years = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(years) or years < 0:
        return 0
    return years


def coerce_experience_profile(parsed: dict) -> ExperienceProfile:
    """Build an ExperienceProfile from a decoded LLM object, defaulting bad fields."""
    titles = parsed.get("titles")
    achievements = parsed.get("achievements")
    return ExperienceProfile(
        years=_coerce_years(parsed.get("years")),
        titles=titles if isinstance(titles, list) else [],
        achievements=achievements if isinstance(achievements, list) else [],
    )


class ExperienceExtractor:
    """
    Asks the generative model for a work-history summary and validates the answer.

    `extract()` never raises: a failed query, a response without a JSON object,
    malformed JSON or a non-object payload all produce `ExperienceProfile()`
    (0 years, no titles, no achievements).
    """

    FUNCTION_NAME = "analyze_work_experience"

    def __init__(
        self,
        llm_client: Optional[LLMClient] = None,
        config: ScannerConfig = SCANNER_DEFAULTS,
    ):
        self.llm_client = llm_client
        self.config = config

    def extract(self, resume_text: str) -> ExperienceProfile:
        try:
            self.llm_client = initialize_llm_if_needed(
                llm_client=self.llm_client,
                function_name=self.FUNCTION_NAME,
                config=self.config,
            )
            response = self.llm_client.query(
                system_prompt=EXPERIENCE_SYSTEM_PROMPT,
                user_prompt=f"Resume Text: {resume_text}",
            )
        except Exception as e:
            fallback_logger.warning(f"Work experience query failed, using default profile: {e}")
            return ExperienceProfile()

        parsed = try_parse_structured(response, "object")
        if parsed is None:
            fallback_logger.warning(
                f"Could not parse work experience from LLM response: `{response[:200]}`"
            )
            return ExperienceProfile()

        return coerce_experience_profile(parsed)
