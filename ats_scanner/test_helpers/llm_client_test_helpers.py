# llm_client_test_helpers.py

from typing import Literal
import json
import random
import uuid

from langchain_core.messages import AIMessage

expected_test_responses = {
    "analyze_work_experience": {
        "success": {
            "years": 5,
            "titles": ["Senior Engineer", "Software Engineer"],
            "achievements": ["Cut AWS spend by 30%", "Led migration to Python 3"],
        },
        "prose_wrapped": (
            "<think>The resume lists two roles.</think>\n"
            "Here is the analysis:\n"
            "```json\n"
            '{"years": "7", "titles": ["Data Scientist"], "achievements": "Won a hackathon"}\n'
            "```"
        ),
        "not_json": "The candidate appears to have several years of experience.",
        "unexpected_json": ["Senior Engineer", "Software Engineer"],
        "empty": "",
    },
    "generate_suggestions": {
        "success": [
            {"category": "Keywords", "suggestion": "Mention leadership experience explicitly."},
            {"category": "Experience", "suggestion": "Quantify the impact of the AWS migration."},
        ],
        "prose_wrapped": (
            "<answer>\n```json\n"
            '[{"category": "Structure", "suggestion": "Add an Education section."}]\n'
            "```\n</answer>"
        ),
        "not_json": "You should add more keywords and improve your formatting.",
        "unexpected_json": [{"category": "Keywords"}],
        "empty": "",
    },
}

MOCK_MODEL_IDS = {"anthropic": "claude-haiku-4-5"}


def create_mock_llm_response(
    function_name: Literal["analyze_work_experience", "generate_suggestions"],
    provider: Literal["anthropic"],
    response_type: Literal["success", "prose_wrapped", "not_json", "unexpected_json", "empty"] = "success"
) -> AIMessage:
    """
    Build an AIMessage shaped like a real provider reply around the canned content
    for `function_name` / `response_type`. Unknown features get "Generic response".
    """
    if provider not in MOCK_MODEL_IDS:
        raise ValueError(f"Unknown llm provider: {provider}")

    canned = expected_test_responses.get(function_name, {}).get(response_type, "Generic response")
    content = canned if isinstance(canned, str) else json.dumps(canned)

    usage = {
        "input_tokens": random.randint(50, 150),
        "output_tokens": max(1, len(content) // 4),
    }
    usage["total_tokens"] = usage["input_tokens"] + usage["output_tokens"]

    return AIMessage(
        content=content,
        additional_kwargs={},
        response_metadata={
            "id": f"msg_{uuid.uuid4().hex[:24]}",
            "model": MOCK_MODEL_IDS[provider],
            "stop_reason": "end_turn",
            "usage": dict(usage),
        },
        id=str(uuid.uuid4()),
        usage_metadata=usage,
    )
