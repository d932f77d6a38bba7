"""
Centralized error handling for the pitch pipeline.

Defines the error taxonomy surfaced to callers and small utilities for
consistent logging around best-effort and must-succeed operations.

Taxonomy:
- ProfileIncomplete: user has no stored profile (user-actionable)
- GenerationFailure: an oracle call failed, timed out or returned unusable output
- NotFound: a referenced company/profile/cache entry does not exist
- ValidationFailure: required input missing or malformed (rejected before oracles)
"""

import logging
from typing import Callable, Optional, TypeVar

# Type variable for generic return types
T = TypeVar("T")


class PitchPrepError(Exception):
    """Base class for all errors surfaced by the pitch pipeline."""


class ProfileIncomplete(PitchPrepError):
    """Raised when the user has no stored profile to generate a pitch from."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__("Please complete your profile before generating a pitch")


class GenerationFailure(PitchPrepError):
    """Raised when an oracle call fails or its output cannot be used."""

    def __init__(self, message: str, company_name: Optional[str] = None):
        self.company_name = company_name
        super().__init__(message)


class NotFound(PitchPrepError):
    """Raised when a referenced record does not exist."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class ValidationFailure(PitchPrepError):
    """Raised when a required input field is missing or malformed."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)


def log_on_exception(
    logger: logging.Logger,
    operation: str,
    level: int = logging.WARNING,
    include_traceback: bool = False,
):
    """
    Context manager for logging exceptions without swallowing them.

    Usage:
        with log_on_exception(logger, "pitch history append", level=logging.ERROR):
            repository.insert_one(...)

    Args:
        logger: Logger instance to use
        operation: Operation description for the log message
        level: Log level (default: WARNING)
        include_traceback: Whether to include stack trace in log
    """

    class ExceptionLogger:
        def __enter__(self):
            return self

        def __exit__(self, exc_type, exc_val, exc_tb):
            if exc_val is not None:
                logger.log(
                    level,
                    f"[{operation}] Failed: {exc_val}",
                    exc_info=include_traceback,
                )
            # Never suppress the exception
            return False

    return ExceptionLogger()


def safe_execute(
    func: Callable[..., T],
    *args,
    operation_name: str = "operation",
    logger: Optional[logging.Logger] = None,
    fallback: T = None,
    critical: bool = False,
    **kwargs,
) -> T:
    """
    Execute a best-effort function, logging and returning a fallback on error.

    Args:
        func: Function to execute
        *args: Positional arguments for func
        operation_name: Name for logging
        logger: Logger instance (uses module logger if None)
        fallback: Value to return on failure
        critical: If True, log at ERROR level with traceback
        **kwargs: Keyword arguments for func

    Returns:
        Function result or fallback value on error

    Usage:
        updated = safe_execute(
            store.upsert_on_company,
            company_id, artifact, breakdown,
            operation_name="company card refresh",
            logger=logger,
            fallback=False,
        )
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    try:
        return func(*args, **kwargs)
    except Exception as e:
        log_level = logging.ERROR if critical else logging.WARNING
        logger.log(
            log_level,
            f"[{operation_name}] Failed: {e}",
            exc_info=critical,
        )
        return fallback
