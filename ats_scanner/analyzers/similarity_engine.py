"""similarity_engine.py
Semantic comparison of a resume against a job description using chunk embeddings.
"""
from typing import List, Optional, Sequence

import numpy as np

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.logging import get_fallback_logger
from ats_scanner.models import MatchScore, SemanticAnalysis, TextChunk
from ats_scanner.file_parser.helpers.chunk_text import chunk_text
from ats_scanner.helper_functions.embeddings.embedding_client import EmbeddingClient

fallback_logger = get_fallback_logger()


def calculate_cosine_similarity(vector1: Sequence[float], vector2: Sequence[float]) -> float:
    """
    Cosine similarity `dot(v1, v2) / (|v1| * |v2|)`, in [-1, 1].

    Returns 0.0 when either vector has zero magnitude.

    Raises:
        ValueError: If the vectors do not share a dimension.
    """
    v1 = np.asarray(vector1, dtype=float)
    v2 = np.asarray(vector2, dtype=float)
    if v1.shape != v2.shape:
        raise ValueError(f"Cannot compare vectors of shape {v1.shape} and {v2.shape}")

    magnitude = float(np.linalg.norm(v1)) * float(np.linalg.norm(v2))
    if magnitude == 0.0:
        return 0.0
    return float(np.dot(v1, v2)) / magnitude


class SimilarityEngine:
    """
    Scores how closely each part of a resume aligns with a job description.

    Both documents are chunked, each document is embedded in one batched call, and
    every resume chunk is compared with every job chunk. A resume chunk's score is
    its best match against any job chunk; the overall similarity is the mean of
    those per-chunk maxima. Only resume chunks are iterated in the outer reduction,
    so the measure answers "how well is each part of the resume backed by the job",
    not the reverse.

    Failures never propagate: any exception during chunking, embedding or scoring
    yields the neutral `SemanticAnalysis()` (similarity 0, no matches).

    Args:
        embedding_client (EmbeddingClient | None): Client used for embeddings. Built
            from `config` on first use when not provided.
        config (ScannerConfig): Chunking and reporting settings.
    """

    def __init__(
        self,
        embedding_client: Optional[EmbeddingClient] = None,
        config: ScannerConfig = SCANNER_DEFAULTS,
    ):
        self.embedding_client = embedding_client
        self.config = config

    def _get_embedding_client(self) -> EmbeddingClient:
        if self.embedding_client is None:
            self.embedding_client = EmbeddingClient(config=self.config)
        return self.embedding_client

    def _chunk(self, text: str) -> List[TextChunk]:
        return chunk_text(
            text,
            chunk_size=self.config.CHUNK_SIZE,
            chunk_overlap=self.config.CHUNK_OVERLAP,
        )

    def analyze(self, resume_text: str, job_description: str) -> SemanticAnalysis:
        """
        Compare the resume with the job description.

        Returns:
            SemanticAnalysis: overall similarity plus the best and weakest matching
                resume chunks (up to `config.TOP_MATCH_COUNT` each).
        """
        try:
            return self._analyze(resume_text, job_description)
        except Exception as e:
            fallback_logger.warning(f"Semantic analysis failed, using neutral similarity: {e}")
            return SemanticAnalysis()

    def _analyze(self, resume_text: str, job_description: str) -> SemanticAnalysis:
        resume_chunks = self._chunk(resume_text)
        job_chunks = self._chunk(job_description)

        if not resume_chunks or not job_chunks:
            return SemanticAnalysis()

        client = self._get_embedding_client()
        resume_embeddings = client.embed_documents([chunk.text for chunk in resume_chunks])
        job_embeddings = client.embed_documents([chunk.text for chunk in job_chunks])

        match_scores = [
            MatchScore(
                text=chunk.text,
                score=max(
                    calculate_cosine_similarity(resume_embedding, job_embedding)
                    for job_embedding in job_embeddings
                ),
            )
            for chunk, resume_embedding in zip(resume_chunks, resume_embeddings)
        ]

        overall_similarity = sum(m.score for m in match_scores) / len(match_scores)

        # Stable sort: equal scores keep document order
        ranked = sorted(match_scores, key=lambda m: m.score, reverse=True)
        top_n = self.config.TOP_MATCH_COUNT

        return SemanticAnalysis(
            overall_similarity=overall_similarity,
            best_matches=ranked[:top_n],
            weak_matches=list(reversed(ranked[-top_n:])),
        )
