"""
Pitch Assembler

Combines the pitch oracle's raw materials, the validated score breakdown and
the cached employer context into the final PitchArtifact.

Every output field is filled: missing lists become empty lists, facts get a
source label, and a follow-up note is templated when the oracle omits one.
"""

import logging
from typing import Any, Iterable, List, Optional

from pydantic import ValidationError

from pitchprep.common.types import (
    EmployerContext,
    PitchArtifact,
    RawPitchMaterials,
    ScoreBreakdown,
    WowFact,
)

logger = logging.getLogger(__name__)

FOLLOW_UP_TEMPLATE = (
    "Hi, this is {user_name}. It was great speaking with you at the career fair "
    "about opportunities at {company_name}. I enjoyed learning more about your "
    "team and would love to stay in touch about open roles. Thank you for your time!"
)
ANONYMOUS_USER = "a student"

# Keys the oracle has used for the text of a fact
_FACT_TEXT_KEYS = ("fact", "claim", "text")


def default_follow_up(user_name: str, company_name: str) -> str:
    return FOLLOW_UP_TEMPLATE.format(
        user_name=(user_name or "").strip() or ANONYMOUS_USER,
        company_name=company_name,
    )


def to_wow_fact(item: Any) -> Optional[WowFact]:
    """
    Normalize one oracle fact into a WowFact.

    Accepts a plain string, a dict with fact/claim/text, or a WowFact.
    Returns None for blank or unrecognizable items.
    """
    if isinstance(item, WowFact):
        return item
    if isinstance(item, str):
        text = item.strip()
        return WowFact(fact=text) if text else None
    if isinstance(item, dict):
        text = next(
            (item[key] for key in _FACT_TEXT_KEYS if isinstance(item.get(key), str) and item[key].strip()),
            None,
        )
        if text is None:
            return None
        try:
            return WowFact(
                fact=text,
                source=item.get("source"),
                source_url=item.get("sourceUrl") or item.get("source_url"),
            )
        except ValidationError as e:
            logger.debug(f"Dropping malformed fact {item!r}: {e}")
            return None
    return None


def merge_facts(*groups: Optional[Iterable[Any]]) -> List[WowFact]:
    """Concatenate fact groups in order, dropping case-insensitive duplicates."""
    seen = set()
    merged: List[WowFact] = []
    for group in groups:
        for item in group or []:
            fact = to_wow_fact(item)
            if fact is None:
                continue
            key = fact.fact.lower()
            if key in seen:
                continue
            seen.add(key)
            merged.append(fact)
    return merged


class PitchAssembler:
    """Builds PitchArtifacts with defaults for anything the oracle left out."""

    def build(
        self,
        raw_materials: RawPitchMaterials,
        breakdown: ScoreBreakdown,
        company_name: str,
        user_name: str,
        context: Optional[EmployerContext] = None,
    ) -> PitchArtifact:
        """
        Assemble the artifact for one (user, company) pairing.

        Facts are the employer context's wow facts followed by the oracle's
        facts, so cached research always surfaces on the card. Matched roles
        fall back to the context's typical roles.
        """
        oracle_facts = raw_materials.interesting_facts
        if not oracle_facts:
            oracle_facts = raw_materials.wow_facts

        facts = merge_facts(context.wow_facts if context else None, oracle_facts)

        top_roles = list(raw_materials.top_matched_roles or [])
        if not top_roles and context is not None:
            top_roles = list(context.typical_roles)

        follow_up = (raw_materials.follow_up_message or "").strip()
        if not follow_up:
            follow_up = default_follow_up(user_name, company_name)

        return PitchArtifact(
            company_name=company_name,
            pitch=raw_materials.pitch,
            facts=facts,
            top_roles=top_roles,
            smart_questions=list(raw_materials.smart_questions or []),
            follow_up_message=follow_up,
            score_breakdown=breakdown,
            employer_context=context,
        )
