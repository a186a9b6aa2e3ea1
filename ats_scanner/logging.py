"""logging.py
Configured loggers for the scanner, the API server and the test suite.
"""
from typing import Literal, Optional
import logging
import os
import sys
from datetime import datetime
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # development, local, test, staging or production
LOG_LEVEL = os.getenv("LOG_LEVEL")  # overrides the per-type level when set

LoggerType = Literal["default", "pytest", "analysis", "analysis_fallback"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

FILE_LOGGING_ENVS = ("development", "local", "test")
CLOUD_LOGGING_ENVS = ("staging", "production")

# Subfolder under the base log folder for each logger type
LOG_SUBFOLDERS = {
    "default": "",
    "pytest": "tests",
    "analysis": "analysis",
    "analysis_fallback": "analysis_fallbacks",
}

CLOUDWATCH_LOG_GROUPS = {
    "default": "ats_scanner_logs",
    "analysis": "ats_scanner_analysis_logs",
    "analysis_fallback": "ats_scanner_fallback_logs",
}


class LoggerFactory:
    """
    Builds loggers whose handlers depend on the ENV they run in.

    Every logger gets an optional console handler. Local environments also
    write a timestamped file per logger under `base_log_folder`, sorted into a
    subfolder by logger type (everything goes to `tests/` while pytest runs).
    Staging and production ship records to CloudWatch through watchtower when
    it is installed.

    Loggers are configured once; asking for the same name again returns the
    logger untouched.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = "logs"):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        logger = logging.getLogger(name)
        if logger.handlers:
            return logger

        logger.propagate = False
        logger.setLevel(self._resolve_level(logger_type))
        formatter = logging.Formatter(LOG_FORMAT)

        handlers = []
        cloud_skipped = False
        if console:
            handlers.append(logging.StreamHandler())

        if self.env in FILE_LOGGING_ENVS:
            handlers.append(self._build_file_handler(name, logger_type))
        elif self.env in CLOUD_LOGGING_ENVS:
            cloud_handler = self._build_cloudwatch_handler(logger_type)
            if cloud_handler is not None:
                handlers.append(cloud_handler)
            else:
                cloud_skipped = True

        # Always keep at least one handler
        if not handlers:
            handlers.append(logging.StreamHandler())

        for handler in handlers:
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        if cloud_skipped:
            logger.warning("watchtower not installed, skipping cloud logging.")

        return logger

    @staticmethod
    def _resolve_level(logger_type: LoggerType) -> int:
        if LOG_LEVEL:
            return getattr(logging, LOG_LEVEL.upper(), logging.INFO)
        return logging.DEBUG if logger_type in ("default", "pytest") else logging.INFO

    def log_folder_for(self, logger_type: LoggerType) -> str:
        """Folder a logger of `logger_type` writes its files to."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, "tests")
        subfolder = LOG_SUBFOLDERS.get(logger_type, "")
        return os.path.join(self.base_log_folder, subfolder) if subfolder else self.base_log_folder

    def _build_file_handler(self, name: str, logger_type: LoggerType) -> logging.FileHandler:
        log_folder = self.log_folder_for(logger_type)
        os.makedirs(log_folder, exist_ok=True)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return logging.FileHandler(
            os.path.join(log_folder, f"{name}_{stamp}.log"), mode="a", encoding="utf-8"
        )

    @staticmethod
    def _build_cloudwatch_handler(logger_type: LoggerType) -> Optional[logging.Handler]:
        """CloudWatch handler for the logger type, or None without watchtower."""
        try:
            import watchtower
        except ImportError:
            return None
        log_group = CLOUDWATCH_LOG_GROUPS.get(logger_type, CLOUDWATCH_LOG_GROUPS["default"])
        return watchtower.CloudWatchLogHandler(log_group=log_group)


def get_fallback_logger() -> logging.Logger:
    """Shared logger for capability failures that were replaced by default values."""
    return LoggerFactory().get_logger(
        name="analysis_fallbacks",
        logger_type="analysis_fallback",
    )
