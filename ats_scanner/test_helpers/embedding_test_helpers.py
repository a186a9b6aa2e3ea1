"""embedding_test_helpers.py
Deterministic stand-ins for the embedding model, used in test mode.
"""
import string
from typing import Dict, List, Sequence

from langchain_core.embeddings import Embeddings


class LetterFrequencyEmbeddings(Embeddings):
    """
    Embeds text as a 26-dimension vector of a-z letter counts.

    Identical texts map to identical vectors and texts sharing vocabulary point in
    similar directions, which is enough to exercise similarity logic offline.
    A text without letters maps to the zero vector.
    """

    def _embed(self, text: str) -> List[float]:
        lowered = text.lower()
        return [float(lowered.count(letter)) for letter in string.ascii_lowercase]

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        return [self._embed(text) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        return self._embed(text)


class FixedVectorEmbeddings(Embeddings):
    """
    Returns preset vectors for known texts and a default vector otherwise.
    Records every batch it receives in `calls`.
    """

    def __init__(self, vectors: Dict[str, Sequence[float]], default: Sequence[float]):
        self.vectors = {text: list(vector) for text, vector in vectors.items()}
        self.default = list(default)
        self.calls: List[List[str]] = []

    def embed_documents(self, texts: List[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [list(self.vectors.get(text, self.default)) for text in texts]

    def embed_query(self, text: str) -> List[float]:
        return list(self.vectors.get(text, self.default))
