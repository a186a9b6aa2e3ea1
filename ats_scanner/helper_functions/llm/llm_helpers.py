"""llm_helpers.py
Shared setup for analyzers that accept an optional LLMClient.
"""

from typing import Optional

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.helper_functions.llm.llm_client import LLMClient

def initialize_llm_if_needed(
    llm_client: Optional[LLMClient] = None,
    function_name: Optional[str] = None,
    config: ScannerConfig = SCANNER_DEFAULTS,
) -> LLMClient:
    """
    Return an initialized LLMClient, reusing `llm_client` when one is given.

    A passed client is initialized in place if it has not been yet. Without one,
    a new client for `function_name` is built from `config`.

    Raises:
        TypeError: If `llm_client` is not an LLMClient.
        LLMConfigError: If a new client cannot resolve its provider, model or API key.
        LLMInitializationError: If the LangChain client cannot be built.
    """
    if llm_client is None:
        llm_client = LLMClient(function_name=function_name, config=config)
        llm_client.initialize_client()
        return llm_client

    if not isinstance(llm_client, LLMClient):
        raise TypeError("Provided llm_client must be an instance of LLMClient.")
    if llm_client.client is None:
        llm_client.initialize_client()
    return llm_client
