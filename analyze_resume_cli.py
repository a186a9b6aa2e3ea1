"""analyze_resume_cli.py
Run ResumeAnalyzer from the command line.
Example: `python analyze_resume_cli.py path/to/resume.pdf path/to/job_description.txt`
"""
import os
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"

import sys

from ats_scanner.exceptions import AnalysisInputError, FileParserError
from ats_scanner.models import AnalysisResult
from ats_scanner.resume_analyzer import ResumeAnalyzer


def main():
    if len(sys.argv) < 3:
        print("Usage: python analyze_resume_cli.py <resume_path> <job_description_path>")
        sys.exit(1)

    resume_path, job_description_path = sys.argv[1], sys.argv[2]

    try:
        with open(job_description_path, "r", encoding="utf-8") as f:
            job_description = f.read()
    except OSError as e:
        print(f"Error: could not read job description `{job_description_path}`: {e}")
        sys.exit(1)

    analyzer = ResumeAnalyzer()

    try:
        result: AnalysisResult = analyzer.analyze_file(resume_path, job_description)
    except (AnalysisInputError, FileParserError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print("Resume Analysis Result:")
    print(f"ATS Score: {result.ats_score}/100")
    print(f"Semantic Similarity: {result.semantic_similarity:.2f}")
    print(f"Matching Keywords: {', '.join(result.keyword_match) if result.keyword_match else 'None'}")
    print(f"Missing Keywords: {', '.join(result.missing_keywords) if result.missing_keywords else 'None'}")
    missing_sections = [section for section, present in result.structure.items() if not present]
    print(f"Missing Sections: {', '.join(missing_sections) if missing_sections else 'None'}")
    print(f"Format Issues: {', '.join(result.format_issues) if result.format_issues else 'None'}")
    print(f"Experience: {result.experience.years:g} years")
    print("Suggestions:")
    for suggestion in result.suggestions:
        print(f"  - [{suggestion.category}] {suggestion.suggestion}")


if __name__ == "__main__":
    main()
