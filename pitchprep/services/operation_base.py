"""
Base class for pitch pipeline operation services.

Each operation (generate pitch, research employers) extends this to get
run-tagged logging, execution timing and a timeout guard for oracle calls.
"""

import asyncio
import logging
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Awaitable, Generator, Optional, TypeVar

from pitchprep.common.config import Config
from pitchprep.common.error_handling import GenerationFailure
from pitchprep.common.logger import PipelineLogger, get_logger

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationService:
    """Base class for pipeline operations."""

    operation_name: str = "operation"  # Override in subclass

    def __init__(self, oracle_timeout: Optional[float] = None):
        """
        Args:
            oracle_timeout: Seconds allowed per oracle call
                            (defaults to Config.ORACLE_TIMEOUT_SECONDS)
        """
        self.oracle_timeout = (
            oracle_timeout if oracle_timeout is not None else Config.ORACLE_TIMEOUT_SECONDS
        )

    def create_run_id(self) -> str:
        """
        Generate unique run ID for tracking.

        Returns:
            Unique run ID string in format "op_{operation}_{random_hex}"
        """
        return f"op_{self.operation_name}_{uuid.uuid4().hex[:12]}"

    def get_run_logger(
        self,
        run_id: str,
        stage: Optional[str] = None,
        company: Optional[str] = None,
    ) -> PipelineLogger:
        """Logger whose lines carry the run id (and stage or company, if given)."""
        return get_logger(self.__class__.__module__, run_id=run_id, stage=stage, company=company)

    async def call_oracle(
        self,
        awaitable: Awaitable[T],
        description: str,
        company_name: Optional[str] = None,
    ) -> T:
        """
        Await an oracle call under the configured timeout.

        Raises:
            GenerationFailure: if the call does not finish in time
        """
        try:
            return await asyncio.wait_for(awaitable, timeout=self.oracle_timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"{description} timed out after {self.oracle_timeout}s")
            raise GenerationFailure(
                f"{description} timed out after {self.oracle_timeout}s",
                company_name=company_name,
            ) from e

    @contextmanager
    def timed_execution(self) -> Generator["OperationTimer", None, None]:
        """
        Context manager for timing operation execution.

        Usage:
            with self.timed_execution() as timer:
                # do work
                pass
            duration_ms = timer.duration_ms
        """
        timer = OperationTimer()
        try:
            yield timer
        finally:
            timer.stop()


@dataclass
class OperationTimer:
    """Timer utility for tracking operation duration."""

    start_time: float = field(default_factory=time.perf_counter)
    end_time: Optional[float] = None

    @property
    def duration_ms(self) -> int:
        """Duration in milliseconds; measured up to now if not stopped yet."""
        if self.end_time is None:
            return int((time.perf_counter() - self.start_time) * 1000)
        return int((self.end_time - self.start_time) * 1000)

    @property
    def duration_seconds(self) -> float:
        return self.duration_ms / 1000.0

    def stop(self) -> int:
        """Stop the timer and return duration in milliseconds."""
        self.end_time = time.perf_counter()
        return self.duration_ms
