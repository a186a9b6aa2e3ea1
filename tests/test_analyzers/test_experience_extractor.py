"""test_experience_extractor.py
Tests for ExperienceExtractor and its coercion helpers.
"""
import math

import pytest
from unittest.mock import MagicMock

from ats_scanner.exceptions import LLMQueryError
from ats_scanner.models import ExperienceProfile
from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.analyzers.experience_extractor import (
    ExperienceExtractor,
    _coerce_years,
    coerce_experience_profile,
)

RESUME_TEXT = "Senior Engineer. Skills: Python, AWS. Experience: 5 years."


def build_mock_client(response_type: str) -> LLMClient:
    return LLMClient(
        function_name=ExperienceExtractor.FUNCTION_NAME,
        test_mode=True,
        test_response_type=response_type,
    )


class TestCoercion:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (5, 5),
            (2.5, 2.5),
            ("7", 7.0),
            ("4.5", 4.5),
            (None, 0),
            ("several", 0),
            (True, 1),
            (False, 0),
            ("", 0),
            (-3, 0),
            (math.inf, 0),
            (float("nan"), 0),
            ([5], 0),
        ],
    )
    def test_coerce_years(self, value, expected):
        assert _coerce_years(value) == expected

    def test_non_list_fields_default_to_empty(self):
        profile = coerce_experience_profile(
            {"years": 3, "titles": "Engineer", "achievements": None}
        )
        assert profile == ExperienceProfile(years=3, titles=[], achievements=[])

    def test_missing_fields_default(self):
        assert coerce_experience_profile({}) == ExperienceProfile()


class TestExperienceExtractor:
    def test_success_response(self):
        extractor = ExperienceExtractor(llm_client=build_mock_client("success"))
        profile = extractor.extract(RESUME_TEXT)

        assert profile.years == 5
        assert profile.titles == ["Senior Engineer", "Software Engineer"]
        assert len(profile.achievements) == 2

    def test_prose_wrapped_response_is_parsed(self):
        """JSON inside reasoning tags and code fences is still found."""
        extractor = ExperienceExtractor(llm_client=build_mock_client("prose_wrapped"))
        profile = extractor.extract(RESUME_TEXT)

        assert profile.years == 7.0
        assert profile.titles == ["Data Scientist"]
        # "achievements" was a plain string
        assert profile.achievements == []

    @pytest.mark.parametrize("response_type", ["not_json", "unexpected_json", "empty"])
    def test_unusable_response_returns_default_profile(self, response_type):
        extractor = ExperienceExtractor(llm_client=build_mock_client(response_type))
        assert extractor.extract(RESUME_TEXT) == ExperienceProfile()

    def test_query_error_returns_default_profile(self):
        llm_client = build_mock_client("success")
        llm_client.initialize_client()
        llm_client.query = MagicMock(side_effect=LLMQueryError(provider="anthropic"))

        extractor = ExperienceExtractor(llm_client=llm_client)
        assert extractor.extract(RESUME_TEXT) == ExperienceProfile()

    def test_missing_api_key_returns_default_profile(self, monkeypatch):
        """Building the client lazily means configuration errors degrade to the default."""
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        extractor = ExperienceExtractor()
        assert extractor.extract(RESUME_TEXT) == ExperienceProfile()
        assert extractor.llm_client is None

    def test_prompt_contains_resume_text(self):
        llm_client = build_mock_client("success")
        llm_client.initialize_client()
        llm_client.query = MagicMock(return_value='{"years": 1, "titles": [], "achievements": []}')

        ExperienceExtractor(llm_client=llm_client).extract(RESUME_TEXT)

        kwargs = llm_client.query.call_args.kwargs
        assert kwargs["user_prompt"] == f"Resume Text: {RESUME_TEXT}"
        assert "JSON object" in kwargs["system_prompt"]

    @pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
    def test_builds_client_when_not_provided(self):
        extractor = ExperienceExtractor()
        profile = extractor.extract(RESUME_TEXT)

        assert isinstance(extractor.llm_client, LLMClient)
        assert extractor.llm_client.function_name == "analyze_work_experience"
        assert profile.years == 5
