"""exceptions.py
Exceptions raised by the file parsers, the analyzer and the model clients.
"""
from typing import Optional, List


# ------------------------ File Parser Errors ------------------------
class FileParserError(Exception):
    """Base exception for anything that stops a resume file from being read."""
    pass


class FileNotSupportedError(FileParserError):
    """The file extension is not one of the supported resume formats."""
    def __init__(
        self,
        extension: str,
        supported_extensions: List[str],
        context: Optional[str] = None
    ):
        self.extension = extension
        self.supported_extensions = list(supported_extensions)
        message = f"Unsupported resume file type '{extension}' (expected one of {self.supported_extensions})."
        if context:
            message += f" Context: {context}"
        super().__init__(message)


class NoFilePathError(FileParserError):
    def __init__(self):
        super().__init__("FileParser has no 'file_path' set, so there is nothing to read.")


class ResumeFileNotFoundError(FileParserError, FileNotFoundError):
    """No file exists at the given resume path."""
    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"Resume file not found: {file_path}")


class FileTooLargeError(FileParserError):
    def __init__(self, max_size: int, actual_size: int):
        self.max_size = max_size
        self.actual_size = actual_size
        super().__init__(f"Resume file is {actual_size} bytes; the limit is {max_size} bytes.")


class FileOpenError(FileParserError):
    """The file exists but its contents could not be decoded."""
    def __init__(self, file_path: str, original_error: str):
        self.file_path = file_path
        self.original_error = original_error
        super().__init__(f"Could not read resume file `{file_path}`: {original_error}")


class FileEmptyError(FileParserError):
    def __init__(self, file_path: str, message: Optional[str] = None):
        self.file_path = file_path
        super().__init__(message or f"File `{file_path}` contains no parsable text.")


# ------------------------ Chunking Errors ------------------------
class ChunkingConfigError(ValueError):
    """chunk_size / chunk_overlap cannot produce a chunk sequence that makes progress."""
    def __init__(self, chunk_size: int, chunk_overlap: int, reason: str):
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        super().__init__(f"{reason} (chunk_size={chunk_size}, chunk_overlap={chunk_overlap})")


# ------------------------ ResumeAnalyzer Errors ------------------------
class AnalysisInputError(Exception):
    """
    Raised when the resume text or the job description is missing.

    Attributes:
        missing_fields (list[str]): "resume" and/or "jobDescription".
        message (str): Client-facing message, also used as the HTTP 400 detail.
    """
    def __init__(self, missing_fields: List[str], message: Optional[str] = None):
        self.missing_fields = list(missing_fields)
        self.message = message or "Resume and job description are required"
        super().__init__(f"{self.message} (missing: {', '.join(self.missing_fields)})")


# ------------------------ Model Provider Errors ------------------------
class ProviderError(Exception):
    """
    Base exception for failures talking to an LLM or embedding provider.

    The provider, model and wrapped exception are kept as attributes and
    appended to the message when present.
    """
    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        self.provider = provider
        self.model = model
        self.original_exception = original_exception

        details = [
            f"{label}: {value}"
            for label, value in (
                ("Provider", provider),
                ("Model", model),
                ("Original Exception", original_exception),
            )
            if value
        ]
        super().__init__(" | ".join([message, *details]))

    @staticmethod
    def _with_detail(message: str, additional_message: Optional[str]) -> str:
        return f"{message}: {additional_message}" if additional_message else message


class LLMConfigError(Exception):
    """A required LLM setting (usually from .env) is missing or invalid."""

    def __init__(
        self,
        variable_name: str,
        message: Optional[str] = None,
        extra_info: Optional[str] = None
    ):
        self.variable_name = variable_name
        self.extra_info = extra_info
        message = message or f"Missing or invalid configuration: {variable_name}."
        if extra_info:
            message += f" | {extra_info}"
        super().__init__(message)

    def __str__(self):
        return f"[CONFIG ERROR] {super().__str__()} | Variable: {self.variable_name}"


class LLMError(ProviderError):
    """Base exception for chat model failures."""


class LLMInitializationError(LLMError):
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        original_exception: Optional[Exception] = None,
        additional_message: Optional[str] = None
    ):
        super().__init__(
            message=self._with_detail("LLM client is not initialized", additional_message),
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMQueryError(LLMError):
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=self._with_detail("LLM query failed", additional_message),
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class LLMEmptyResponse(LLMError):
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None
    ):
        super().__init__(message="LLM returned an empty response", provider=provider, model=model)


class EmbeddingError(ProviderError):
    """Base exception for embedding model failures."""


class EmbeddingConfigError(EmbeddingError):
    """The embedding provider or model cannot be resolved or loaded."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=self._with_detail("Invalid embedding configuration", additional_message),
            provider=provider,
            model=model,
            original_exception=original_exception,
        )


class EmbeddingQueryError(EmbeddingError):
    """Embedding a batch failed or returned the wrong number/shape of vectors."""
    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        additional_message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=self._with_detail("Embedding query failed", additional_message),
            provider=provider,
            model=model,
            original_exception=original_exception,
        )
