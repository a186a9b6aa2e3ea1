"""
llm_client.py

Thin LangChain wrapper around the chat model the analyzers prompt for
experience profiles and improvement suggestions.
"""
import os
from typing import Optional, Literal

from dotenv import load_dotenv

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.exceptions import (
    LLMConfigError,
    LLMInitializationError,
    LLMQueryError,
    LLMEmptyResponse
)
from ats_scanner.test_helpers import llm_client_test_helpers

load_dotenv()

# Per-provider lookups: display name, env var holding the key, ScannerConfig field with the model
PROVIDER_SETTINGS = {
    "anthropic": {
        "display_name": "Anthropic",
        "api_key_env": "ANTHROPIC_API_KEY",
        "model_setting": "ANTHROPIC_MODEL_ID",
    },
}
SUPPORTED_PROVIDERS = list(PROVIDER_SETTINGS)
PLACEHOLDER_API_KEY = "<REPLACE_ME>"

MockResponseType = Literal["success", "prose_wrapped", "not_json", "unexpected_json", "empty"]


class LLMClient:
    """
    Chat model client for one provider/model pair.

    Construction only resolves settings (provider, model, API key). Call
    `initialize_client()` to build the LangChain model, then `query()` with a
    system and user prompt to get the raw response text back. Parsing that text
    is left to `structured_output.try_parse_structured`.

    With `test_mode=True` no provider is contacted: `query()` answers with the
    canned response registered for `function_name` and `test_response_type`
    in `llm_client_test_helpers`, and a missing API key is tolerated.

    Example:
        >>> client = LLMClient(function_name="generate_suggestions")
        >>> client.initialize_client()
        >>> client.query(system_prompt="You review resumes.", user_prompt="...")
        '[{"category": "Keywords", "suggestion": "..."}]'
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        function_name: Optional[str] = None,
        test_mode: Optional[bool] = False,
        test_response_type: MockResponseType = "success",
        config: ScannerConfig = SCANNER_DEFAULTS,
    ):
        """
        Args:
            provider: Provider name. Defaults to `config.LLM_PROVIDER`.
            model: Model ID. Defaults to the provider's model in `config`.
            function_name: Feature making the calls; picks the canned test response.
            test_mode: Serve canned responses instead of calling the provider.
            test_response_type: Which canned response to serve in test mode.
            config: Scanner settings.

        Raises:
            LLMConfigError: Unknown provider, no model ID, or no API key outside test mode.
        """
        self.config = config
        self.function_name = function_name
        self.test_mode = test_mode
        self.test_response_type = test_response_type
        self.temperature = config.LLM_TEMPERATURE

        self.provider = provider or config.LLM_PROVIDER
        if self.provider not in PROVIDER_SETTINGS:
            raise LLMConfigError(
                variable_name="LLM_PROVIDER",
                extra_info=f"Choices are: {SUPPORTED_PROVIDERS}"
            )
        self.settings = PROVIDER_SETTINGS[self.provider]

        self.model = model or getattr(config, self.settings["model_setting"], None)
        if not self.model:
            raise LLMConfigError(
                variable_name=self.settings["model_setting"],
                message=(
                    f"No model ID configured for `{self.provider}`. Set "
                    f"{self.settings['model_setting']} in ScannerConfig or pass `model`."
                )
            )

        self.api_key = self._load_api_key()
        self.client = None  # built by initialize_client()

    def _load_api_key(self) -> Optional[str]:
        """Read the provider key from the environment. Validity is not checked here."""
        key_name = self.settings["api_key_env"]
        api_key = os.getenv(key_name)
        if api_key and api_key != PLACEHOLDER_API_KEY:
            return api_key
        if self.test_mode:
            return None
        raise LLMConfigError(
            variable_name=key_name,
            message=f"{key_name} is not set; live `{self.provider}` queries need an API key."
        )

    def initialize_client(self) -> None:
        """
        Build the LangChain chat model. Makes no network call.

        Raises:
            LLMInitializationError: If the provider client cannot be constructed.
        """
        if self.test_mode:
            self.client = "mock"
            return

        try:
            self.client = self._build_provider_client()
        except Exception as e:
            raise LLMInitializationError(
                provider=self.provider,
                model=self.model,
                original_exception=e
            )

    def _build_provider_client(self):
        if self.provider == "anthropic":
            from langchain_anthropic import ChatAnthropic
            return ChatAnthropic(
                model=self.model,
                anthropic_api_key=self.api_key,
                temperature=self.temperature,
            )
        raise LLMConfigError(
            variable_name="LLM_PROVIDER",
            extra_info=f"Unsupported provider: {self.provider}"
        )

    # --- QUERY EXECUTION ---
    def query(
        self,
        system_prompt: Optional[str],
        user_prompt: str,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Send one system/user prompt pair and return the stripped response text.

        `temperature` overrides `config.LLM_TEMPERATURE` for this call only.

        Raises:
            LLMInitializationError: If `initialize_client()` has not been run.
            LLMQueryError: If the call fails or comes back empty.
        """
        if not self.client:
            raise LLMInitializationError(provider=self.provider, model=self.model)

        messages: list[BaseMessage] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=user_prompt))

        try:
            if self.test_mode:
                response = self._mock_response()
            else:
                response: AIMessage = self.client.invoke(
                    messages,
                    temperature=self.temperature if temperature is None else temperature,
                )

            text = self._content_to_text(response.content if response is not None else None).strip()
            if text:
                return text
            raise LLMEmptyResponse(provider=self.provider, model=self.model)

        except Exception as e:
            raise LLMQueryError(provider=self.provider, model=self.model, original_exception=e)

    def _mock_response(self) -> AIMessage:
        """Canned response for `function_name` in test mode."""
        if not (self.function_name and self.test_response_type):
            raise LLMQueryError(
                provider=self.provider,
                model=self.model,
                additional_message=(
                    "test_mode needs a function_name to pick a canned response "
                    f"(function_name={self.function_name!r})"
                ),
            )
        return llm_client_test_helpers.create_mock_llm_response(
            function_name=self.function_name,
            response_type=self.test_response_type,
            provider=self.provider
        )

    @staticmethod
    def _content_to_text(content) -> str:
        """Join an AIMessage's content, which may be a string or a list of content blocks."""
        if content is None:
            return ""
        if isinstance(content, str):
            return content
        return "".join(
            block if isinstance(block, str) else block.get("text", "")
            for block in content
            if isinstance(block, str) or (isinstance(block, dict) and block.get("type") == "text")
        )

    # --- TESTING ---
    def test_connection(self) -> bool:
        """
        Ping the provider to confirm the key, quota and model all work.

        Initializes the client first if needed. Always True in test mode.
        """
        if not self.client:
            self.initialize_client()
        return self._test_connection_generic(self.settings["display_name"])

    def _test_connection_generic(self, provider_name: str) -> bool:
        """
        Invoke a one-word "ping" on the initialized client.

        Raises:
            LLMInitializationError: If there is no client, or the ping fails. Quota
                and rate-limit failures are named in the message.
        """
        if not self.client:
            raise LLMInitializationError(
                provider=provider_name,
                model=self.model,
                original_exception="No client initialized"
            )
        if self.test_mode:
            return True

        try:
            response = self.client.invoke("ping")
        except Exception as e:
            error_text = str(e).lower()
            hints = []
            if "insufficient_quota" in error_text:
                hints.append(f"Out of tokens for `{provider_name}`")
            if "rate limit" in error_text:
                hints.append(f"Rate limit reached for `{provider_name}`")
            raise LLMInitializationError(
                provider=provider_name,
                model=self.model,
                original_exception=e,
                additional_message="; ".join(hints) or None
            )
        return bool(response is not None and hasattr(response, "content"))
