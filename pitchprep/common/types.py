"""
Canonical Types and Schemas for the Pitch Pipeline

Oracle payloads (employer context, raw pitch materials) are pydantic models so
generative output is validated on the way in. Internal records (cache entries,
score breakdowns, pitch artifacts) are dataclasses with to_dict() helpers for
MongoDB and JSON serialization.

Stored and wire shapes use camelCase keys so records written by the web app
stay readable; Python attributes are snake_case.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Score categories in display order
SCORE_CATEGORIES: Tuple[str, ...] = (
    "location",
    "workAuthorization",
    "major",
    "jobType",
    "skills",
    "resume",
)

SCORE_CATEGORY_LABELS: Dict[str, str] = {
    "location": "Location",
    "workAuthorization": "Work authorization",
    "major": "Major",
    "jobType": "Job type",
    "skills": "Skills",
    "resume": "Resume",
}

MAX_SUB_SCORE = 20
MAX_MATCH_SCORE = MAX_SUB_SCORE * len(SCORE_CATEGORIES)

DEFAULT_FACT_SOURCE = "AI research"
DEFAULT_SOURCE_URL = "#"

INDUSTRY_CATEGORIES: Tuple[str, ...] = (
    "Tech", "Finance", "Healthcare", "Consulting", "Energy", "Education",
    "Government", "Retail", "Manufacturing", "Media", "Real Estate",
    "Transportation", "Nonprofit", "Legal", "Agriculture", "Other",
)


def normalize_company_key(company_name: str) -> str:
    """Cache key for a company: trimmed and lowercased."""
    return (company_name or "").strip().lower()


def _as_list(value: Any) -> List[Any]:
    """None becomes [], a lone string becomes [string]; other non-lists are rejected."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"expected a list, got {type(value).__name__}")
    return list(value)


def _clean_string_list(value: Any) -> List[str]:
    """Keep non-blank strings from a list; None becomes an empty list."""
    return [item.strip() for item in _as_list(value) if isinstance(item, str) and item.strip()]


# ===== ORACLE PAYLOADS (pydantic) =====


class WowFact(BaseModel):
    """A notable claim about an employer with the label of where it came from."""

    model_config = ConfigDict(populate_by_name=True)

    fact: str = Field(..., min_length=1, description="The claim itself")
    source: str = Field(default=DEFAULT_FACT_SOURCE, description="Source label")
    source_url: str = Field(default=DEFAULT_SOURCE_URL, alias="sourceUrl")

    @field_validator("fact")
    @classmethod
    def strip_fact(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("fact must not be blank")
        return v

    @field_validator("source", mode="before")
    @classmethod
    def default_blank_source(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return DEFAULT_FACT_SOURCE
        return v.strip()

    @field_validator("source_url", mode="before")
    @classmethod
    def default_blank_url(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            return DEFAULT_SOURCE_URL
        return v.strip()

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


class EmployerContext(BaseModel):
    """
    Structured facts about one employer used to ground pitch generation.

    company_name keeps the display casing; cache lookups use
    normalize_company_key() instead.
    """

    model_config = ConfigDict(populate_by_name=True)

    company_name: str = Field(..., min_length=1, alias="companyName")
    what_they_do: str = Field(..., min_length=1, alias="whatTheyDo")
    culture_mission: str = Field(default="", alias="cultureMission")
    headquarters: str = Field(default="")
    industry_category: str = Field(default="Other", alias="industryCategory")
    valued_skills: List[str] = Field(default_factory=list, alias="valuedSkills")
    typical_roles: List[str] = Field(default_factory=list, alias="typicalRoles")
    recent_projects_and_products: List[str] = Field(
        default_factory=list, alias="recentProjectsAndProducts"
    )
    wow_facts: List[WowFact] = Field(default_factory=list, alias="wowFacts")

    @field_validator("company_name", "what_they_do")
    @classmethod
    def require_text(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("culture_mission", "headquarters", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        return v.strip() if isinstance(v, str) else ""

    @field_validator("industry_category", mode="before")
    @classmethod
    def known_category(cls, v: Any) -> str:
        if isinstance(v, str):
            for category in INDUSTRY_CATEGORIES:
                if v.strip().lower() == category.lower():
                    return category
        return "Other"

    @field_validator("valued_skills", "typical_roles", "recent_projects_and_products", mode="before")
    @classmethod
    def clean_lists(cls, v: Any) -> List[str]:
        return _clean_string_list(v)

    @field_validator("wow_facts", mode="before")
    @classmethod
    def drop_blank_facts(cls, v: Any) -> List[Any]:
        kept = []
        for item in _as_list(v):
            if isinstance(item, str) and item.strip():
                kept.append({"fact": item})
            elif isinstance(item, dict) and str(item.get("fact") or "").strip():
                kept.append(item)
        return kept

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class RawPitchMaterials(BaseModel):
    """
    Unvalidated pitch output from the pitch oracle.

    Only the pitch text is required. List fields stay None when the oracle
    omits them; the assembler fills defaults. score_breakdown is kept raw for
    the aggregator to clamp, and match_score is never trusted.
    """

    model_config = ConfigDict(populate_by_name=True)

    company_name: str = Field(default="", alias="companyName")
    pitch: str = Field(..., alias="elevatorPitch30s")
    interesting_facts: Optional[List[Any]] = Field(default=None, alias="interestingFacts")
    wow_facts: Optional[List[Any]] = Field(default=None, alias="wowFacts")
    smart_questions: Optional[List[str]] = Field(default=None, alias="smartQuestions")
    top_matched_roles: Optional[List[str]] = Field(default=None, alias="topMatchedRoles")
    follow_up_message: Optional[str] = Field(default=None, alias="followUpMessage")
    score_breakdown: Dict[str, Any] = Field(default_factory=dict, alias="scoreBreakdown")
    match_score: Optional[Any] = Field(default=None, alias="matchScore")

    @field_validator("pitch")
    @classmethod
    def require_pitch(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("elevator pitch must not be blank")
        return v

    @field_validator("smart_questions", "top_matched_roles", mode="before")
    @classmethod
    def clean_optional_lists(cls, v: Any) -> Optional[List[str]]:
        if v is None:
            return None
        return _clean_string_list(v)

    @field_validator("score_breakdown", mode="before")
    @classmethod
    def breakdown_mapping(cls, v: Any) -> Dict[str, Any]:
        return v if isinstance(v, dict) else {}

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


# ===== INTERNAL RECORDS (dataclasses) =====


@dataclass(frozen=True)
class UserProfileSnapshot:
    """Read-only view of the profile fields needed for pitch generation."""

    name: str
    email: str = ""
    school: str = ""
    major: str = ""
    graduation_year: str = ""
    location: str = ""
    work_authorization: str = ""
    job_type_preference: str = ""
    skills: Tuple[str, ...] = ()
    preferred_roles: Tuple[str, ...] = ()
    preferred_industries: Tuple[str, ...] = ()
    background: str = ""
    resume_text: str = ""

    @classmethod
    def from_user_document(cls, user: Dict[str, Any]) -> "UserProfileSnapshot":
        """
        Build a snapshot from a users-collection document.

        Resume text may live on the profile or at the top level of the user
        document depending on how it was captured.
        """
        profile = user.get("profile") or {}

        def text(value: Any) -> str:
            return str(value).strip() if value is not None else ""

        def strings(value: Any) -> Tuple[str, ...]:
            if not isinstance(value, (list, tuple, str)):
                return ()
            return tuple(_clean_string_list(value))

        return cls(
            name=text(user.get("name")),
            email=text(user.get("email")),
            school=text(profile.get("school")),
            major=text(profile.get("major")),
            graduation_year=text(profile.get("graduationYear")),
            location=text(profile.get("location")),
            work_authorization=text(profile.get("workAuthorization")),
            job_type_preference=text(profile.get("jobTypePreference")),
            skills=strings(profile.get("skills")),
            preferred_roles=strings(profile.get("preferredRoles")),
            preferred_industries=strings(profile.get("preferredIndustries")),
            background=text(profile.get("background")),
            resume_text=text(profile.get("resumeText") or user.get("resumeText")),
        )


@dataclass
class ContextCacheEntry:
    """One cached employer research record."""

    company_key: str
    display_name: str
    context: EmployerContext
    updated_at: datetime
    created_at: datetime

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ContextCacheEntry":
        updated_at = doc["updatedAt"]
        return cls(
            company_key=doc["companyName"],
            display_name=doc.get("displayName") or doc["companyName"],
            context=EmployerContext.model_validate(doc["context"]),
            updated_at=updated_at,
            created_at=doc.get("createdAt") or updated_at,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companyName": self.company_key,
            "displayName": self.display_name,
            "context": self.context.to_dict(),
            "updatedAt": self.updated_at,
            "createdAt": self.created_at,
        }


@dataclass(frozen=True)
class SubScore:
    """One category score in [0, 20] with its one-sentence reason."""

    score: int
    reason: str

    def to_dict(self) -> Dict[str, Any]:
        return {"score": self.score, "reason": self.reason}


@dataclass(frozen=True)
class ScoreBreakdown:
    """
    Six-category match score.

    match_score is always the sum of the sub-scores; there is no stored total
    that could drift from them.
    """

    location: SubScore
    work_authorization: SubScore
    major: SubScore
    job_type: SubScore
    skills: SubScore
    resume: SubScore
    reasoning: str = ""

    def items(self) -> List[Tuple[str, SubScore]]:
        """Sub-scores keyed by category name, in display order."""
        return list(zip(SCORE_CATEGORIES, (
            self.location,
            self.work_authorization,
            self.major,
            self.job_type,
            self.skills,
            self.resume,
        )))

    @property
    def match_score(self) -> int:
        return sum(sub.score for _, sub in self.items())

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {category: sub.to_dict() for category, sub in self.items()}


@dataclass
class PitchArtifact:
    """The assembled, user-facing result of one pitch generation."""

    company_name: str
    pitch: str
    facts: List[WowFact]
    top_roles: List[str]
    smart_questions: List[str]
    follow_up_message: str
    score_breakdown: ScoreBreakdown
    generated_at: datetime = field(default_factory=datetime.utcnow)
    employer_context: Optional[EmployerContext] = None

    @property
    def match_score(self) -> int:
        return self.score_breakdown.match_score

    @property
    def match_reasoning(self) -> str:
        return self.score_breakdown.reasoning

    def to_career_fair_card(self) -> Dict[str, Any]:
        """Shape stored on the company record and rendered by the card UI."""
        return {
            "pitch": self.pitch,
            "wowFacts": [fact.to_dict() for fact in self.facts],
            "topRoles": list(self.top_roles),
            "smartQuestions": list(self.smart_questions),
            "followUpMessage": self.follow_up_message,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "companyName": self.company_name,
            "careerFairCard": self.to_career_fair_card(),
            "matchScore": self.match_score,
            "matchReasoning": self.match_reasoning,
            "scoreBreakdown": self.score_breakdown.to_dict(),
            "generatedAt": self.generated_at.isoformat(),
        }


@dataclass
class ResearchError:
    """Per-company error marker returned by batch research."""

    company_name: str
    error: str
    error_type: str = "GenerationFailure"

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error, "errorType": self.error_type}
