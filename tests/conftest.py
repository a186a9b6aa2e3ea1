"""conftest.py
Shared pytest hooks, the `--llm-mode` option and offline-client fixtures.
"""
from collections import Counter

import pytest
from ats_scanner.logging import LoggerFactory
from ats_scanner.conftest_helpers import apply_mock_llm_patch

LLM_MODES = ["mock_only", "basic_only", "full"]

# --------------------------------------------------------------
# TEST RUN LOGGING
# --------------------------------------------------------------
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
outcome_counts = Counter()
last_logged_file = None


@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    outcome_counts.clear()
    logger.info("==== ATS SCANNER TEST RUN START ====")


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Write a header whenever the run moves on to a new test file."""
    global last_logged_file
    test_file = location[0]
    if test_file != last_logged_file:
        last_logged_file = test_file
        logger.info(f"---- {test_file} ----")


@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    # Setup and teardown phases only matter when they fail
    if report.when != "call" and report.outcome != "failed":
        return

    outcome_counts[report.outcome] += 1
    if report.failed:
        logger.error(f"FAILED ({report.when}): {report.nodeid}\n{report.longreprtext}")
    elif report.skipped:
        logger.warning(f"SKIPPED: {report.nodeid}")
    else:
        logger.info(f"PASSED: {report.nodeid} [{report.duration:.2f}s]")


@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    summary = ", ".join(f"{count} {outcome}" for outcome, count in sorted(outcome_counts.items()))
    logger.info(f"==== ATS SCANNER TEST RUN END: exitstatus={exitstatus} ({summary or 'no tests'}) ====")


# --------------------------------------------------------------
# LLM MODE OPTION
# --------------------------------------------------------------
def pytest_addoption(parser):
    """
    Add `--llm-mode`, which decides how many tests may call live services.

        pytest                       # offline only (default)
        pytest --llm-mode=basic_only # plus a single live LLM prompt
        pytest --llm-mode=full       # plus live end-to-end analysis
    """
    parser.addoption(
        "--llm-mode",
        action="store",
        default=LLM_MODES[0],
        choices=LLM_MODES,
        help=(
            "How much live LLM / embedding traffic the suite may generate:\n"
            "  'mock_only' (default): every client runs in test mode.\n"
            "  'basic_only': allow the small live connectivity checks.\n"
            "  'full': allow live end-to-end analysis tests as well."
        ),
    )


@pytest.fixture(scope="session")
def LLM_TEST_MODE(request) -> str:
    """The `--llm-mode` chosen for this run."""
    return request.config.getoption("--llm-mode")


# --------------------------------------------------------------
# OFFLINE CLIENT FIXTURES
# --------------------------------------------------------------
@pytest.fixture(autouse=False)
def FORCE_MOCK_LLM_RESPONSES(monkeypatch):
    """
    Put every LLMClient and EmbeddingClient built during the test into test mode.

    Use it on a single test (`def test_x(FORCE_MOCK_LLM_RESPONSES)`) or on a
    whole class with `@pytest.mark.usefixtures("FORCE_MOCK_LLM_RESPONSES")`.
    It ignores `--llm-mode`, so tests using it never leave the machine.
    """
    apply_mock_llm_patch(monkeypatch)
    yield


@pytest.fixture
def USE_MOCK_LLM_RESPONSE_SETTING(monkeypatch, LLM_TEST_MODE):
    """Same patch as FORCE_MOCK_LLM_RESPONSES, skipped when `--llm-mode=full`."""
    if LLM_TEST_MODE != "full":
        apply_mock_llm_patch(monkeypatch)
    yield
