"""test_api_server.py
Tests for the FastAPI endpoints.
"""
import asyncio
import os
import time

import httpx
import pytest
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from api import server
from ats_scanner.exceptions import FileOpenError
from ats_scanner.resume_analyzer import ResumeAnalyzer

TEST_RESUME = b"Senior Engineer. Skills: Python, AWS. Experience: 5 years."
TEST_JOB_DESCRIPTION = "Looking for Python, AWS expert with leadership."


@pytest.fixture
def api_client(monkeypatch, FORCE_MOCK_LLM_RESPONSES):
    """TestClient backed by a ResumeAnalyzer whose clients run in test mode."""
    monkeypatch.setattr(server, "resume_analyzer", ResumeAnalyzer())
    return TestClient(server.app)


def post_resume(client, filename="resume.txt", content=TEST_RESUME, job_description=TEST_JOB_DESCRIPTION):
    files = {"resume": (filename, content, "application/octet-stream")}
    data = {"jobDescription": job_description} if job_description is not None else {}
    return client.post("/analyse", files=files, data=data)


class TestHealthCheck:
    def test_root(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"status": "Server is running", "version": "1.0.0"}


class TestAnalyseEndpoint:
    def test_successful_analysis(self, api_client):
        response = post_resume(api_client)
        assert response.status_code == 200

        body = response.json()
        assert body["keywordMatch"] == ["python", "aws"]
        assert body["missingKeywords"] == ["leadership"]
        assert 0 <= body["atsScore"] <= 100
        assert body["experience"]["years"] == 5
        assert body["structure"]["skills"] is True
        assert [s["category"] for s in body["suggestions"]] == ["Keywords", "Experience"]

    def test_missing_resume_returns_400(self, api_client):
        response = api_client.post("/analyse", data={"jobDescription": TEST_JOB_DESCRIPTION})
        assert response.status_code == 400
        assert response.json() == {"error": "Resume and job description are required"}

    def test_missing_job_description_returns_400(self, api_client):
        response = post_resume(api_client, job_description=None)
        assert response.status_code == 400
        assert response.json() == {"error": "Resume and job description are required"}

    def test_blank_job_description_returns_400(self, api_client):
        response = post_resume(api_client, job_description="   ")
        assert response.status_code == 400

    def test_unsupported_file_returns_415(self, api_client):
        response = post_resume(api_client, filename="resume.png", content=b"\x89PNG")
        assert response.status_code == 415
        body = response.json()
        assert body["error"] == "Unsupported file type"
        assert ".png" in body["details"]

    def test_empty_file_returns_422(self, api_client):
        response = post_resume(api_client, content=b"   ")
        assert response.status_code == 422

    def test_oversized_file_returns_413(self, api_client):
        content = b"a" * (5 * 1024 * 1024 + 1)
        response = post_resume(api_client, content=content)
        assert response.status_code == 413

    def test_unreadable_file_returns_422(self, api_client, monkeypatch):
        analyzer = MagicMock()
        analyzer.analyze_file.side_effect = FileOpenError("resume.pdf", "broken xref table")
        monkeypatch.setattr(server, "resume_analyzer", analyzer)

        response = post_resume(api_client, filename="resume.pdf")
        assert response.status_code == 422

    def test_unexpected_error_returns_500(self, api_client, monkeypatch):
        analyzer = MagicMock()
        analyzer.analyze_file.side_effect = RuntimeError("boom")
        monkeypatch.setattr(server, "resume_analyzer", analyzer)

        response = post_resume(api_client)
        assert response.status_code == 500
        assert response.json() == {"error": "Error analyzing resume", "details": "boom"}

    def test_temp_file_is_removed(self, api_client, monkeypatch):
        seen_paths = []
        real_analyzer = server.resume_analyzer

        def record_path(file_path, job_description):
            seen_paths.append(file_path)
            return real_analyzer.analyze_file(file_path=file_path, job_description=job_description)

        analyzer = MagicMock()
        analyzer.analyze_file.side_effect = record_path
        monkeypatch.setattr(server, "resume_analyzer", analyzer)

        response = post_resume(api_client)
        assert response.status_code == 200
        assert len(seen_paths) == 1
        assert seen_paths[0].endswith(".txt")

        assert not os.path.exists(seen_paths[0])


class TestConcurrentRequests:
    def test_health_check_answers_while_analysis_runs(self, api_client, monkeypatch):
        """A slow analysis must not hold up other requests."""
        real_analyzer = server.resume_analyzer

        def slow_analysis(file_path, job_description):
            time.sleep(1.5)
            return real_analyzer.analyze_file(file_path=file_path, job_description=job_description)

        analyzer = MagicMock()
        analyzer.analyze_file.side_effect = slow_analysis
        monkeypatch.setattr(server, "resume_analyzer", analyzer)

        async def analyse_then_ping():
            transport = httpx.ASGITransport(app=server.app)
            async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
                analysis = asyncio.create_task(
                    client.post(
                        "/analyse",
                        files={"resume": ("resume.txt", TEST_RESUME, "text/plain")},
                        data={"jobDescription": TEST_JOB_DESCRIPTION},
                    )
                )
                await asyncio.sleep(0.1)

                started = time.perf_counter()
                health = await client.get("/")
                health_seconds = time.perf_counter() - started

                return health, health_seconds, await analysis

        health, health_seconds, analysis = asyncio.run(analyse_then_ping())

        assert health.status_code == 200
        assert health_seconds < 0.6
        assert analysis.status_code == 200
        assert analysis.json()["keywordMatch"] == ["python", "aws"]
