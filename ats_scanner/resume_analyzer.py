"""resume_analyzer.py
Holds the framework that orchestrates every analyzer and returns an AnalysisResult.
"""
from concurrent.futures import ThreadPoolExecutor
from typing import Optional

from ats_scanner.config import SCANNER_DEFAULTS, ScannerConfig
from ats_scanner.exceptions import AnalysisInputError
from ats_scanner.logging import LoggerFactory
from ats_scanner.models import AnalysisResult, ExperienceProfile, SemanticAnalysis

from ats_scanner.file_parser.extract_text import extract_text_from_file
from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.helper_functions.embeddings.embedding_client import EmbeddingClient

from ats_scanner.analyzers.skills_extractor import extract_skills, compare_skills
from ats_scanner.analyzers.structure_checker import check_resume_structure
from ats_scanner.analyzers.format_checker import detect_format_issues
from ats_scanner.analyzers.similarity_engine import SimilarityEngine
from ats_scanner.analyzers.score_composer import calculate_ats_score
from ats_scanner.analyzers.experience_extractor import ExperienceExtractor
from ats_scanner.analyzers.suggestion_generator import SuggestionContext, SuggestionGenerator

logger = LoggerFactory().get_logger(name="resume_analyzer", logger_type="analysis")


class ResumeAnalyzer:
    """
    Orchestrates the complete resume analysis, from raw text to an AnalysisResult.

    Combines:
        - ``SimilarityEngine`` (chunk embeddings, max-then-mean similarity)
        - ``extract_skills`` / ``compare_skills`` (controlled vocabulary keywords)
        - ``check_resume_structure`` and ``detect_format_issues``
        - ``ExperienceExtractor`` and ``SuggestionGenerator`` (generative model)
        - ``calculate_ats_score`` (weighted composite)

    Semantic analysis and experience extraction only depend on the input texts,
    so they run concurrently on a thread pool (at most ``config.MAX_THREADS``
    workers). Suggestion generation needs every other result and always runs last.
    No state is shared between calls to ``analyze``.

    Collaborators can be injected to simplify testing; anything not provided is
    built from ``config`` (and shares the given ``llm_client`` / ``embedding_client``).

    Example
    -------
    >>> analyzer = ResumeAnalyzer()
    >>> result = analyzer.analyze(resume_text, job_description)
    >>> result.ats_score
    72
    """

    def __init__(
        self,
        config: ScannerConfig = SCANNER_DEFAULTS,
        llm_client: Optional[LLMClient] = None,
        embedding_client: Optional[EmbeddingClient] = None,
        similarity_engine: Optional[SimilarityEngine] = None,
        experience_extractor: Optional[ExperienceExtractor] = None,
        suggestion_generator: Optional[SuggestionGenerator] = None,
    ):
        """
        Args:
            config (ScannerConfig): Settings shared by every analyzer.
            llm_client (LLMClient | None): Optional pre-initialized LLM client used by the
                experience extractor and the suggestion generator.
            embedding_client (EmbeddingClient | None): Optional embedding client used by
                the similarity engine.
            similarity_engine (SimilarityEngine | None): Override for the similarity engine.
            experience_extractor (ExperienceExtractor | None): Override for the experience
                extractor.
            suggestion_generator (SuggestionGenerator | None): Override for the suggestion
                generator.
        """
        self.config = config
        self.max_threads = max(1, config.MAX_THREADS)

        self.similarity_engine = similarity_engine or SimilarityEngine(
            embedding_client=embedding_client,
            config=config,
        )
        self.experience_extractor = experience_extractor or ExperienceExtractor(
            llm_client=llm_client,
            config=config,
        )
        self.suggestion_generator = suggestion_generator or SuggestionGenerator(
            llm_client=llm_client,
            config=config,
        )

    @staticmethod
    def _validate_inputs(resume_text: Optional[str], job_description: Optional[str]) -> None:
        """
        Raises:
            AnalysisInputError: If either text is missing or whitespace-only.
        """
        missing = []
        if not resume_text or not resume_text.strip():
            missing.append("resume")
        if not job_description or not job_description.strip():
            missing.append("jobDescription")
        if missing:
            raise AnalysisInputError(missing_fields=missing)

    def _run_capability_calls(
        self,
        resume_text: str,
        job_description: str,
    ) -> tuple[SemanticAnalysis, ExperienceProfile]:
        """Run semantic analysis and experience extraction, in parallel when allowed."""
        if self.max_threads == 1:
            semantic_analysis = self.similarity_engine.analyze(resume_text, job_description)
            experience = self.experience_extractor.extract(resume_text)
            return semantic_analysis, experience

        with ThreadPoolExecutor(max_workers=min(self.max_threads, 2)) as executor:
            semantic_future = executor.submit(
                self.similarity_engine.analyze, resume_text, job_description
            )
            experience_future = executor.submit(self.experience_extractor.extract, resume_text)
            return semantic_future.result(), experience_future.result()

    def analyze(self, resume_text: str, job_description: str) -> AnalysisResult:
        """
        Full pipeline: analyze → score → suggest → return ``AnalysisResult``.

        Args:
            resume_text (str): Decoded resume text.
            job_description (str): Job description text.

        Returns:
            AnalysisResult: Complete analysis. Degraded sub-analyses show up only as
                lower scores and default suggestions.

        Raises:
            AnalysisInputError: If the resume text or job description is missing.
        """
        self._validate_inputs(resume_text, job_description)

        semantic_analysis, experience = self._run_capability_calls(resume_text, job_description)

        resume_skills = extract_skills(resume_text, self.config.SKILL_VOCABULARY)
        job_skills = extract_skills(job_description, self.config.SKILL_VOCABULARY)
        matching_keywords, missing_keywords = compare_skills(resume_skills, job_skills)

        structure = check_resume_structure(resume_text, self.config.SECTION_PATTERNS)
        format_issues = detect_format_issues(resume_text, self.config.MAX_RESUME_LENGTH)

        ats_score = calculate_ats_score(
            overall_similarity=semantic_analysis.overall_similarity,
            matching_keywords=matching_keywords,
            missing_keywords=missing_keywords,
            structure=structure,
            experience_years=experience.years,
            weights=self.config.SCORE_WEIGHTS,
        )

        suggestions = self.suggestion_generator.generate(
            SuggestionContext(
                semantic_similarity=semantic_analysis.overall_similarity,
                matching_keywords=matching_keywords,
                missing_keywords=missing_keywords,
                structure=structure,
                format_issues=format_issues,
                experience=experience,
                job_description=job_description,
                weak_matches=semantic_analysis.weak_matches,
            )
        )

        logger.info(
            f"Analysis complete: atsScore={ats_score}, "
            f"similarity={semantic_analysis.overall_similarity:.3f}, "
            f"matching={len(matching_keywords)}, missing={len(missing_keywords)}"
        )

        return AnalysisResult(
            ats_score=ats_score,
            suggestions=suggestions,
            semantic_similarity=semantic_analysis.overall_similarity,
            best_matching_sections=semantic_analysis.best_matches,
            sections_needing_improvement=semantic_analysis.weak_matches,
            keyword_match=matching_keywords,
            missing_keywords=missing_keywords,
            structure=structure,
            format_issues=format_issues,
            experience=experience,
        )

    def analyze_file(self, file_path: str, job_description: str) -> AnalysisResult:
        """
        Extract the text of a .pdf, .docx or .txt resume and analyze it.

        Raises:
            AnalysisInputError: If the job description is missing.
            FileParserError: If the file cannot be read (see `extract_text_from_file`).
        """
        if not job_description or not job_description.strip():
            raise AnalysisInputError(missing_fields=["jobDescription"])

        resume_text = extract_text_from_file(
            file_path=file_path,
            max_file_size_mb=self.config.MAX_FILE_SIZE_MB,
        )
        return self.analyze(resume_text, job_description)
