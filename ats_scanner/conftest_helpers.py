"""conftest_helpers.py
Helper functions for `tests/conftest.py`
"""

from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.helper_functions.embeddings.embedding_client import EmbeddingClient


# --------------------------------------------------------------
# SETUP MONKEYPATCH FIXTURES
# --------------------------------------------------------------
def apply_mock_llm_patch(monkeypatch, response_type: str = "success"):
    """
    Core patching logic for LLMClient and EmbeddingClient.

    Forces every client built during a test to run offline:
      - `LLMClient(test_mode=True, test_response_type=response_type)`, so queries
        return the canned response registered for the caller's `function_name`
        (see `llm_client_test_helpers.expected_test_responses`).
      - `EmbeddingClient(test_mode=True)`, so embeddings come from
        `LetterFrequencyEmbeddings` instead of a downloaded model.

    Notes:
      - Intended to be called from a fixture to control scope.
      - Does not yield; directly applies the monkeypatch.
    """
    original_llm_init = LLMClient.__init__
    original_embedding_init = EmbeddingClient.__init__

    def patched_llm_init(self, *args, **kwargs):
        kwargs.setdefault("test_mode", True)
        kwargs.setdefault("test_response_type", response_type)
        original_llm_init(self, *args, **kwargs)

    def patched_embedding_init(self, *args, **kwargs):
        kwargs.setdefault("test_mode", True)
        original_embedding_init(self, *args, **kwargs)

    monkeypatch.setattr(LLMClient, "__init__", patched_llm_init)
    monkeypatch.setattr(EmbeddingClient, "__init__", patched_embedding_init)
