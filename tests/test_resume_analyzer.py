"""test_resume_analyzer.py
Run tests on ResumeAnalyzer
"""
from pathlib import Path

import pytest
from docx import Document
from reportlab.pdfgen import canvas

from ats_scanner.config import ScannerConfig
from ats_scanner.exceptions import AnalysisInputError, FileNotSupportedError
from ats_scanner.models import AnalysisResult, ExperienceProfile, SemanticAnalysis
from ats_scanner.helper_functions.llm.llm_client import LLMClient
from ats_scanner.helper_functions.embeddings.embedding_client import EmbeddingClient
from ats_scanner.analyzers.similarity_engine import SimilarityEngine
from ats_scanner.analyzers.experience_extractor import ExperienceExtractor
from ats_scanner.analyzers.suggestion_generator import get_default_suggestions
from ats_scanner.resume_analyzer import ResumeAnalyzer

# ---------------------------------------------------------------------
# SETUP TEST VARIABLES
# ---------------------------------------------------------------------
TEST_RESUME = "Senior Engineer. Skills: Python, AWS. Experience: 5 years."
TEST_JOB_DESCRIPTION = "Looking for Python, AWS expert with leadership."

RESULT_KEYS = {
    "atsScore",
    "suggestions",
    "semanticSimilarity",
    "bestMatchingSections",
    "sectionsNeedingImprovement",
    "keywordMatch",
    "missingKeywords",
    "structure",
    "formatIssues",
    "experience",
}


# ---------------------------------------------------------------------
# FIXTURES FOR FAKE FILES
# ---------------------------------------------------------------------
@pytest.fixture(scope="module")
def fake_pdf_file(tmp_path_factory) -> Path:
    pdf_path = tmp_path_factory.mktemp("fake_files") / "fake_resume.pdf"
    c = canvas.Canvas(str(pdf_path))
    c.drawString(72, 750, TEST_RESUME)
    c.save()
    return pdf_path


@pytest.fixture(scope="module")
def fake_docx_file(tmp_path_factory) -> Path:
    docx_path = tmp_path_factory.mktemp("fake_files") / "fake_resume.docx"
    doc = Document()
    doc.add_paragraph(TEST_RESUME)
    doc.save(docx_path)
    return docx_path


@pytest.fixture(scope="module")
def fake_txt_file(tmp_path_factory) -> Path:
    txt_path = tmp_path_factory.mktemp("fake_files") / "fake_resume.txt"
    txt_path.write_text(TEST_RESUME, encoding="utf-8")
    return txt_path


# ---------------------------------------------------------------------
# Integration-level test with live services
# ---------------------------------------------------------------------
def test_analyze_real_llm(LLM_TEST_MODE):
    """Analyze with the real LLM and embedding model if LLM_TEST_MODE is 'full'."""
    if LLM_TEST_MODE != "full":
        pytest.skip(f"Skipping real LLM test because LLM_TEST_MODE={LLM_TEST_MODE}")

    result = ResumeAnalyzer().analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)
    assert 0 <= result.ats_score <= 100
    assert result.keyword_match == ["python", "aws"]
    assert len(result.suggestions) > 0


# NOTE: From this point on ALWAYS prevent live LLM querying for all tests in this file
# ---------------------------------------------------------------------
# Standard functionality
# ---------------------------------------------------------------------
@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestResumeAnalyzerBasic:
    """Confirm ResumeAnalyzer runs and behaves correctly in normal use."""

    def test_init_runs_without_crashing(self):
        analyzer = ResumeAnalyzer()
        assert isinstance(analyzer.similarity_engine, SimilarityEngine)
        assert isinstance(analyzer.experience_extractor, ExperienceExtractor)

    def test_end_to_end_analysis(self):
        result = ResumeAnalyzer().analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)

        assert isinstance(result, AnalysisResult)
        assert result.keyword_match == ["python", "aws"]
        assert result.missing_keywords == ["leadership"]
        assert isinstance(result.ats_score, int)
        assert 0 <= result.ats_score <= 100

        assert result.structure == {
            "experience": True,
            "education": False,
            "skills": True,
            "contact": False,
        }
        assert result.format_issues == []
        assert result.experience.years == 5
        assert [s.category for s in result.suggestions] == ["Keywords", "Experience"]
        assert 0.0 < result.semantic_similarity <= 1.0
        assert result.best_matching_sections[0].text == TEST_RESUME

    def test_to_dict_has_flat_camel_case_record(self):
        record = ResumeAnalyzer().analyze(TEST_RESUME, TEST_JOB_DESCRIPTION).to_dict()

        assert set(record.keys()) == RESULT_KEYS
        assert record["keywordMatch"] == ["python", "aws"]
        assert record["experience"]["titles"] == ["Senior Engineer", "Software Engineer"]
        assert set(record["suggestions"][0].keys()) == {"category", "suggestion"}

    def test_results_are_deterministic(self):
        analyzer = ResumeAnalyzer()
        first = analyzer.analyze(TEST_RESUME, TEST_JOB_DESCRIPTION).to_dict()
        second = analyzer.analyze(TEST_RESUME, TEST_JOB_DESCRIPTION).to_dict()
        assert first == second

    def test_sequential_mode_matches_threaded_mode(self):
        threaded = ResumeAnalyzer().analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)
        sequential = ResumeAnalyzer(config=ScannerConfig(MAX_THREADS=1)).analyze(
            TEST_RESUME, TEST_JOB_DESCRIPTION
        )
        assert threaded.to_dict() == sequential.to_dict()

    def test_format_issues_reported(self):
        resume = TEST_RESUME + " \ufffd" + " filler" * 2000
        result = ResumeAnalyzer().analyze(resume, TEST_JOB_DESCRIPTION)
        assert result.format_issues == ["Contains special characters", "Resume might be too long"]

    @pytest.mark.parametrize("fixture_name", ["fake_pdf_file", "fake_docx_file", "fake_txt_file"])
    def test_analyze_file(self, fixture_name, request):
        file_path = request.getfixturevalue(fixture_name)
        result = ResumeAnalyzer().analyze_file(str(file_path), TEST_JOB_DESCRIPTION)
        assert result.keyword_match == ["python", "aws"]
        assert result.missing_keywords == ["leadership"]


@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")
class TestResumeAnalyzerEdgeCases:
    """Input validation and degraded capability calls."""

    @pytest.mark.parametrize(
        "resume_text, job_description, missing",
        [
            ("", TEST_JOB_DESCRIPTION, ["resume"]),
            (TEST_RESUME, "   ", ["jobDescription"]),
            (None, None, ["resume", "jobDescription"]),
        ],
    )
    def test_missing_inputs_raise(self, resume_text, job_description, missing):
        with pytest.raises(AnalysisInputError) as exc_info:
            ResumeAnalyzer().analyze(resume_text, job_description)
        assert exc_info.value.missing_fields == missing
        assert exc_info.value.message == "Resume and job description are required"

    def test_analyze_file_checks_job_description_first(self, tmp_path):
        """A missing job description is reported before the file is touched."""
        with pytest.raises(AnalysisInputError):
            ResumeAnalyzer().analyze_file(str(tmp_path / "missing.pdf"), "")

    def test_analyze_file_unsupported_extension(self, tmp_path):
        image_path = tmp_path / "resume.png"
        image_path.write_bytes(b"\x89PNG")
        with pytest.raises(FileNotSupportedError):
            ResumeAnalyzer().analyze_file(str(image_path), TEST_JOB_DESCRIPTION)

    def test_failed_llm_calls_degrade_to_defaults(self):
        """A shared client without a registered feature fails every query."""
        analyzer = ResumeAnalyzer(llm_client=LLMClient(test_mode=True))
        result = analyzer.analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)

        assert result.experience == ExperienceProfile()
        assert result.suggestions == get_default_suggestions()
        assert result.keyword_match == ["python", "aws"]

    def test_failed_embeddings_degrade_to_neutral_similarity(self, mocker):
        embedding_client = EmbeddingClient(test_mode=True)
        mocker.patch.object(
            embedding_client, "embed_documents", side_effect=RuntimeError("model unavailable")
        )
        analyzer = ResumeAnalyzer(embedding_client=embedding_client)
        result = analyzer.analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)

        assert result.semantic_similarity == 0.0
        assert result.best_matching_sections == []
        assert result.sections_needing_improvement == []

    def test_injected_components_are_used(self, mocker):
        similarity_engine = SimilarityEngine(embedding_client=EmbeddingClient(test_mode=True))
        mocker.patch.object(
            similarity_engine, "analyze", return_value=SemanticAnalysis(overall_similarity=1.0)
        )
        experience_extractor = ExperienceExtractor()
        mocker.patch.object(
            experience_extractor, "extract", return_value=ExperienceProfile(years=10)
        )

        analyzer = ResumeAnalyzer(
            similarity_engine=similarity_engine,
            experience_extractor=experience_extractor,
        )
        result = analyzer.analyze(TEST_RESUME, TEST_JOB_DESCRIPTION)

        # 35 (semantic) + 16.67 (keywords) + 10 (structure) + 20 (experience)
        assert result.ats_score == 82
        similarity_engine.analyze.assert_called_once_with(TEST_RESUME, TEST_JOB_DESCRIPTION)
        experience_extractor.extract.assert_called_once_with(TEST_RESUME)
