"""
Employer Context Cache

Maps a normalized company name to the most recent employer research and
decides whether that research is still fresh enough to use.

- Key: trimmed, lowercased company name (both get and put normalize)
- Hit: now - updated_at < TTL (7 days by default)
- put: idempotent upsert; createdAt is set once, content/updatedAt replaced

Stale entries are never deleted; the TTL only gates use. Concurrent misses for
the same company may both fetch and both put; the last write wins.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from pydantic import ValidationError

from pitchprep.common.config import Config
from pitchprep.common.repositories import EmployerContextRepositoryInterface
from pitchprep.common.types import ContextCacheEntry, EmployerContext, normalize_company_key

logger = logging.getLogger(__name__)


def _utc_naive(value: datetime) -> datetime:
    """PyMongo returns naive UTC datetimes; compare everything in that form."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class ContextCache:
    """TTL-gated cache of employer research backed by a repository."""

    def __init__(
        self,
        repository: EmployerContextRepositoryInterface,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
    ):
        """
        Args:
            repository: Storage for cache entries
            ttl: Freshness window (defaults to Config.EMPLOYER_CONTEXT_TTL_DAYS)
            clock: Returns the current UTC time; injectable for tests
        """
        self._repository = repository
        self.ttl = ttl if ttl is not None else timedelta(days=Config.EMPLOYER_CONTEXT_TTL_DAYS)
        self._clock = clock

    def now(self) -> datetime:
        return _utc_naive(self._clock())

    def get_entry(self, company_name: str) -> Optional[ContextCacheEntry]:
        """
        Return the stored entry regardless of age, or None.

        Entries whose stored context no longer validates are treated as absent.
        """
        company_key = normalize_company_key(company_name)
        if not company_key:
            return None

        doc = self._repository.find_by_company_key(company_key)
        if not doc:
            return None

        try:
            return ContextCacheEntry.from_document(doc)
        except (KeyError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable cache entry for {company_key}: {e}")
            return None

    def is_fresh(self, entry: ContextCacheEntry) -> bool:
        return self.now() - _utc_naive(entry.updated_at) < self.ttl

    def get(self, company_name: str) -> Optional[EmployerContext]:
        """
        Return cached context if present and fresh; None means a miss.
        """
        entry = self.get_entry(company_name)

        if entry is None:
            logger.info(f"Cache MISS for {company_name}")
            return None

        if not self.is_fresh(entry):
            logger.info(f"Cache EXPIRED for {company_name} (updated {entry.updated_at.isoformat()})")
            return None

        logger.info(f"Cache HIT for {company_name}")
        return entry.context

    def put(self, company_name: str, context: EmployerContext) -> bool:
        """
        Store freshly fetched context for a company.

        Returns:
            True if the write succeeded. A failed write is logged and the
            caller keeps using the context it already holds.
        """
        company_key = normalize_company_key(company_name)
        if not company_key:
            raise ValueError("company_name must not be blank")

        stored = self._repository.upsert_context(
            company_key=company_key,
            display_name=company_name.strip(),
            context=context.to_dict(),
            fetched_at=self.now(),
        )

        if stored:
            logger.info(f"Cached employer context for {company_name}")
        else:
            logger.warning(f"Failed to cache employer context for {company_name}")
        return stored
