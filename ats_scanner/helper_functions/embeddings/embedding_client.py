"""
embedding_client.py

LangChain-based client for the embedding model used by the SimilarityEngine.
Supports HuggingFace sentence-transformers models.
"""
import math
from typing import Dict, List, Optional

from langchain_core.embeddings import Embeddings

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.exceptions import EmbeddingConfigError, EmbeddingQueryError
from ats_scanner.helper_functions.embeddings.embedding_loader import load_embedding_model
from ats_scanner.test_helpers.embedding_test_helpers import LetterFrequencyEmbeddings

SUPPORTED_EMBEDDING_PROVIDERS = ["huggingface"]

class EmbeddingClient:
    """
    Turns batches of text into fixed-dimension vectors. Must be "initialized" using
    `initialize_client()` before it can embed (embedding calls initialize lazily).

    Every call to `embed_documents()` is one batched request: it returns exactly one
    vector per input text, in input order, all with the same dimension.

    Attributes:
        provider (str): Embedding provider (e.g., "huggingface").
        model (str): Model identifier. Resolved from `config` when not provided.
        test_mode (bool): If True, uses deterministic letter-frequency vectors instead
            of a real model.
        loaded_embedding_models (Dict[str, Embeddings]): Cache shared with other clients
            so a model is only loaded once per process.
        client (Embeddings | None): Initialized LangChain embeddings model.

    Example:
        >>> client = EmbeddingClient()
        >>> vectors = client.embed_documents(["Python developer", "AWS engineer"])
        >>> len(vectors)
        2
    """

    def __init__(
        self,
        provider: Optional[str] = None,
        model: Optional[str] = None,
        test_mode: bool = False,
        loaded_embedding_models: Optional[Dict[str, Embeddings]] = None,
        config: ScannerConfig = SCANNER_DEFAULTS,
    ):
        self.config = config
        self.test_mode = test_mode
        self.loaded_embedding_models = (
            loaded_embedding_models if loaded_embedding_models is not None else {}
        )

        self.provider = provider or config.EMBEDDING_PROVIDER
        if self.provider not in SUPPORTED_EMBEDDING_PROVIDERS:
            raise EmbeddingConfigError(
                provider=self.provider,
                additional_message=f"Choices are: {SUPPORTED_EMBEDDING_PROVIDERS}",
            )

        default_models = {
            "huggingface": config.HF_EMBEDDING_MODEL_ID,
        }
        self.model = model or default_models.get(self.provider)
        if not self.model:
            raise EmbeddingConfigError(
                provider=self.provider,
                additional_message="No embedding model ID was provided or configured.",
            )

        self.client: Optional[Embeddings] = None

    def initialize_client(self) -> None:
        """
        Load the embedding model (or the test double) into `self.client`.

        Raises:
            EmbeddingConfigError: If the model cannot be loaded.
        """
        if self.test_mode:
            self.client = LetterFrequencyEmbeddings()
            return

        try:
            self.client = load_embedding_model(
                model_name=self.model,
                loaded_embedding_models=self.loaded_embedding_models,
                device=self.config.EMBEDDING_DEVICE,
            )
        except Exception as e:
            raise EmbeddingConfigError(
                provider=self.provider,
                model=self.model,
                original_exception=e,
            )

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        """
        Embed a batch of texts in one call.

        Args:
            texts (List[str]): Texts to embed.

        Returns:
            List[List[float]]: One vector per text, same order as the input.

        Raises:
            EmbeddingQueryError: If the model call fails, or the returned batch has the
                wrong length, mixed dimensions or non-finite values.
        """
        if not texts:
            return []

        if self.client is None:
            self.initialize_client()

        try:
            vectors = self.client.embed_documents(list(texts))
        except Exception as e:
            raise EmbeddingQueryError(
                provider=self.provider,
                model=self.model,
                original_exception=e,
            )

        self._validate_batch(vectors, expected_count=len(texts))
        return [list(map(float, vector)) for vector in vectors]

    def _validate_batch(self, vectors: List[List[float]], expected_count: int) -> None:
        """Check that a returned batch lines up with its input texts."""
        if vectors is None or len(vectors) != expected_count:
            raise EmbeddingQueryError(
                provider=self.provider,
                model=self.model,
                additional_message=(
                    f"Expected {expected_count} vectors, got "
                    f"{0 if vectors is None else len(vectors)}"
                ),
            )

        dimensions = {len(vector) for vector in vectors}
        if len(dimensions) != 1 or 0 in dimensions:
            raise EmbeddingQueryError(
                provider=self.provider,
                model=self.model,
                additional_message=f"Vectors in one batch must share a non-zero dimension, got {sorted(dimensions)}",
            )

        if any(not math.isfinite(value) for vector in vectors for value in vector):
            raise EmbeddingQueryError(
                provider=self.provider,
                model=self.model,
                additional_message="Embedding batch contains non-finite values",
            )
