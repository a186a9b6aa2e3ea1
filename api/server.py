"""server.py
Server to launch a FastAPI / Swagger UI instance.
"""
import os
import tempfile
from typing import Dict, List, Optional

from fastapi import FastAPI, UploadFile, File, Form
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ats_scanner.config import SCANNER_DEFAULTS
from ats_scanner.exceptions import (
    AnalysisInputError,
    FileEmptyError,
    FileNotSupportedError,
    FileOpenError,
    FileTooLargeError,
)
from ats_scanner.logging import LoggerFactory
from ats_scanner.resume_analyzer import ResumeAnalyzer


logger = LoggerFactory().get_logger(name="api_server")

app = FastAPI(title="Resume ATS Scanner API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

class SuggestionModel(BaseModel):
    category: str
    suggestion: str

class MatchScoreModel(BaseModel):
    text: str
    score: float

class ExperienceModel(BaseModel):
    years: float
    titles: List
    achievements: List

class AnalysisResponse(BaseModel):
    atsScore: int
    suggestions: List[SuggestionModel]
    semanticSimilarity: float
    bestMatchingSections: List[MatchScoreModel]
    sectionsNeedingImprovement: List[MatchScoreModel]
    keywordMatch: List[str]
    missingKeywords: List[str]
    structure: Dict[str, bool]
    formatIssues: List[str]
    experience: ExperienceModel

# Initiate ResumeAnalyzer for use when server calls
resume_analyzer = ResumeAnalyzer()


def get_resume_analyzer() -> ResumeAnalyzer:
    return resume_analyzer


def error_response(status_code: int, error: str, details: Optional[str] = None) -> JSONResponse:
    """Top-level `{"error": ..., "details": ...}` body used by every failed request."""
    content = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)


@app.get("/")
async def root():
    return {"status": "Server is running", "version": "1.0.0"}


@app.post(
    "/analyse",
    response_model=AnalysisResponse,
    summary="Score a resume against a job description",
    description=(
        "Uploads a resume (PDF, DOCX or TXT) with a job description and returns the ATS "
        "score, keyword and section analysis, and improvement suggestions."
    ),
)
async def analyse_resume(
    resume: Optional[UploadFile] = File(None),
    jobDescription: Optional[str] = Form(None),
):
    """
    Upload a resume file, validate it, analyze it, and return the AnalysisResult record.

    The analysis itself runs in the threadpool so other requests are served meanwhile.
    """
    if resume is None or not resume.filename or not jobDescription or not jobDescription.strip():
        return error_response(400, "Resume and job description are required")

    # ---- Validate file size ----
    contents = await resume.read()
    max_bytes = SCANNER_DEFAULTS.MAX_FILE_SIZE_MB * 1024 * 1024
    if len(contents) > max_bytes:
        return error_response(
            413,
            "File too large",
            f"Max allowed size is {SCANNER_DEFAULTS.MAX_FILE_SIZE_MB} MB.",
        )

    # ---- Save upload to a temp file (keeps the extension for parser selection) ----
    suffix = os.path.splitext(resume.filename)[1].lower()
    fd, temp_path = tempfile.mkstemp(suffix=suffix, prefix="resume_")

    try:
        with os.fdopen(fd, "wb") as f:
            f.write(contents)

        # ---- Run analysis pipeline ----
        result = await run_in_threadpool(
            get_resume_analyzer().analyze_file,
            file_path=temp_path,
            job_description=jobDescription,
        )
        return AnalysisResponse(**result.to_dict())

    except AnalysisInputError as e:
        return error_response(400, e.message)
    except FileNotSupportedError as e:
        return error_response(415, "Unsupported file type", str(e))
    except FileTooLargeError as e:
        return error_response(413, "File too large", str(e))
    except (FileEmptyError, FileOpenError) as e:
        return error_response(422, "Could not read resume", str(e))
    except Exception as e:
        logger.error(f"Analysis error: {e}")
        return error_response(500, "Error analyzing resume", str(e))

    finally:
        # ---- Cleanup temp file ----
        try:
            os.remove(temp_path)
        except FileNotFoundError:
            pass
