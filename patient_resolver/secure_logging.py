"""
Secure logging utilities for patient identity resolution.

Search input and roster entries carry patient names and room numbers. This
module keeps that data out of production logs while still recording an audit
line for every resolution.
"""

import logging
import re
from typing import Any, Optional

from .config import DEV_LOG_FORMAT, LOG_DATE_FORMAT, LOG_FORMAT


class SecureLogger:
    """
    Secure logging wrapper that sanitizes sensitive data before logging.

    Designed for ward tooling where patient identity must be protected
    while keeping audit trails and debugging output usable.
    """

    # Patterns that should never appear in logs
    SENSITIVE_PATTERNS = [
        r'(?i)(password)[\'"]?\s*[:=]\s*[\'"]?[^\s\'"]+',
        r'(?i)(secret)[\'"]?\s*[:=]\s*[\'"]?[^\s\'"]+',
        r'(?i)(token)[\'"]?\s*[:=]\s*[\'"]?[^\s\'"]+',
        r'(?i)(api[_-]?key)[\'"]?\s*[:=]\s*[\'"]?[^\s\'"]+',
    ]

    # Patient data patterns that should be minimized in logs
    PATIENT_DATA_PATTERNS = [
        r"\b\d{4}-\d{2}-\d{2}\b",  # Date patterns (DOB)
        r"\b\d{1,2}/\d{1,2}/\d{4}\b",  # Date patterns (MM/DD/YYYY)
    ]

    def __init__(self, logger: logging.Logger, production_mode: bool = True):
        """
        Initialize secure logger wrapper.

        Args:
            logger: The underlying logger instance
            production_mode: If True, applies strict security filtering
        """
        self.logger = logger
        self.production_mode = production_mode

    def _sanitize_message(self, message: str) -> str:
        sanitized = message
        for pattern in self.SENSITIVE_PATTERNS:
            sanitized = re.sub(pattern, r"\1=***REDACTED***", sanitized)

        if self.production_mode:
            for pattern in self.PATIENT_DATA_PATTERNS:
                sanitized = re.sub(pattern, "***DATE***", sanitized)

        return sanitized

    def mask_identifier(self, value: Optional[str]) -> str:
        """
        Mask a patient name or free-text search string for logging.

        Production mode keeps only the length; development mode keeps the
        first two characters and the last one.
        """
        if not value:
            return "<empty>"
        if self.production_mode:
            return f"<text[{len(value)}]>"
        if len(value) > 4:
            return f"{value[:2]}***{value[-1:]}"
        return "***"

    def debug(self, message: str, **kwargs: Any) -> None:
        """Log debug message with security filtering."""
        if self.logger.isEnabledFor(logging.DEBUG):
            sanitized = self._sanitize_message(message)
            self.logger.debug(sanitized, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        """Log info message with security filtering."""
        sanitized = self._sanitize_message(message)
        self.logger.info(sanitized, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        """Log warning message with security filtering."""
        sanitized = self._sanitize_message(message)
        self.logger.warning(sanitized, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        """Log error message with security filtering."""
        sanitized = self._sanitize_message(message)
        self.logger.error(sanitized, **kwargs)

    def log_patient_search(
        self,
        search_type: str,
        roster_size: int,
        match_type: str,
        results_count: int,
        duration_ms: Optional[float] = None,
    ) -> None:
        """
        Log a patient resolution without exposing the search text.

        Args:
            search_type: Scenario that handled the input (room, name, name+room)
            roster_size: Number of patients searched
            match_type: Outcome (exact, partial, none)
            results_count: Number of patients referenced by the result
            duration_ms: Resolution duration in milliseconds
        """
        duration_str = f" ({duration_ms:.2f}ms)" if duration_ms is not None else ""
        self.info(
            f"PATIENT_SEARCH: {search_type} search over {roster_size} patients "
            f"-> {match_type} with {results_count} results{duration_str}",
        )

    def log_exact_tie(self, search_type: str, tie_count: int) -> None:
        """Record that more than one patient qualified as an exact match."""
        self.warning(
            f"PATIENT_SEARCH: {search_type} search found {tie_count + 1} exact matches; "
            f"keeping the first in roster order and flagging the rest for disambiguation",
        )

    def log_roster_load(self, source: str, patient_count: int, success: bool = True) -> None:
        status = "SUCCESS" if success else "FAILED"
        self.info(f"ROSTER_LOAD: {source} {status}, {patient_count} patients")


def get_secure_logger(name: str, production_mode: Optional[bool] = None) -> SecureLogger:
    """
    Get a secure logger instance.

    Args:
        name: Logger name (typically __name__)
        production_mode: Enable production security filtering. Defaults to the
            mode set by ``configure_secure_logging``.

    Returns:
        SecureLogger instance
    """
    if production_mode is None:
        production_mode = _PRODUCTION_MODE
    base_logger = logging.getLogger(name)
    return SecureLogger(base_logger, production_mode=production_mode)


def configure_secure_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    production_mode: bool = True,
) -> None:
    """
    Configure secure logging for the entire application.

    Args:
        level: Logging level
        log_file: Optional log file path
        production_mode: Enable production security filtering
    """
    log_format = LOG_FORMAT if production_mode else DEV_LOG_FORMAT
    formatter = logging.Formatter(log_format, datefmt=LOG_DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # stderr keeps stdout free for results
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    global _PRODUCTION_MODE
    _PRODUCTION_MODE = production_mode


# Module-level variable to track production mode
_PRODUCTION_MODE = True


def is_production_mode() -> bool:
    """Check if logging is in production mode."""
    return _PRODUCTION_MODE
