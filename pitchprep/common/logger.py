"""
Logging for pitch and research runs.

Every line written during one generate-pitch or research-employers run carries
the run id, the step it came from and, once known, the company being worked
on:

    [run:op_generate-pitc] [research] [Acme Corp] Cache MISS, fetching

DEBUG_MODE=true (or --debug on the CLI) turns on verbose output everywhere.
"""

import logging
import os
import sys
from typing import Optional


_GLOBAL_DEBUG_MODE = os.getenv("DEBUG_MODE", "false").lower() == "true"

RUN_ID_CHARS = 16

SIMPLE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
JSON_FORMAT = (
    '{"time": "%(asctime)s", "level": "%(levelname)s", '
    '"name": "%(name)s", "message": "%(message)s"}'
)


def set_global_debug_mode(enabled: bool) -> None:
    global _GLOBAL_DEBUG_MODE
    _GLOBAL_DEBUG_MODE = enabled


def is_debug_mode() -> bool:
    return _GLOBAL_DEBUG_MODE


class PipelineLogger:
    """
    Wraps a stdlib logger and tags each message with run, stage and company.

    Instances are cheap; use bind() to hand a sub-step its own stage tag
    without losing the run id.
    """

    def __init__(
        self,
        name: str,
        run_id: Optional[str] = None,
        stage: Optional[str] = None,
        debug_mode: Optional[bool] = None,
        company: Optional[str] = None,
    ):
        self.logger = logging.getLogger(name)
        self.run_id = run_id
        self.stage = stage
        self.company = company

        self._debug_mode = is_debug_mode() if debug_mode is None else debug_mode
        if self._debug_mode:
            self.logger.setLevel(logging.DEBUG)

    def bind(self, stage: str, company: Optional[str] = None) -> "PipelineLogger":
        """Same run, new stage; the company tag carries over unless replaced."""
        return PipelineLogger(
            self.logger.name,
            run_id=self.run_id,
            stage=stage,
            debug_mode=self._debug_mode,
            company=company or self.company,
        )

    def _tag(self, message: str) -> str:
        tags = []
        if self.run_id:
            tags.append(f"[run:{self.run_id[:RUN_ID_CHARS]}]")
        if self.stage:
            tags.append(f"[{self.stage}]")
        if self.company:
            tags.append(f"[{self.company}]")
        return " ".join(tags + [message]) if tags else message

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._tag(message), **kwargs)

    def info(self, message: str, **kwargs):
        self.logger.info(self._tag(message), **kwargs)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._tag(message), **kwargs)

    def error(self, message: str, **kwargs):
        self.logger.error(self._tag(message), **kwargs)

    def exception(self, message: str, **kwargs):
        """ERROR with the active traceback attached."""
        self.logger.exception(self._tag(message), **kwargs)


def setup_logging(level: str = "INFO", format: str = "simple") -> None:
    """
    Send all logging to stdout at the given level.

    "json" emits one object per line for the API deployment; anything else
    gets the human-readable format used by the scripts. Existing root
    handlers are replaced so repeated calls do not duplicate output.
    """
    log_level = logging.DEBUG if is_debug_mode() else getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    if format == "json":
        handler.setFormatter(logging.Formatter(JSON_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(SIMPLE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)


def get_logger(
    name: str,
    run_id: Optional[str] = None,
    stage: Optional[str] = None,
    debug_mode: Optional[bool] = None,
    company: Optional[str] = None,
) -> PipelineLogger:
    return PipelineLogger(name, run_id, stage, debug_mode, company)
