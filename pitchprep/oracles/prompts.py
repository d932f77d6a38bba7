"""
Prompt templates for the employer research and pitch oracles.

Templates use str.format placeholders, so literal JSON braces are doubled.
"""

from typing import Optional

from pitchprep.common.types import (
    INDUSTRY_CATEGORIES,
    EmployerContext,
    UserProfileSnapshot,
)

RESUME_EXCERPT_CHARS = 1000

# ===== EMPLOYER RESEARCH =====

SYSTEM_PROMPT_EMPLOYER_RESEARCH = """You are a career research assistant. Provide FACTUAL, SPECIFIC information about companies for students preparing for career fairs.

**RULES**:
1. Return ONLY valid JSON
2. Use only information you are confident about; fall back to general industry knowledge and say so in the source label
3. Be SPECIFIC - no vague phrases like "cutting-edge" or "industry leader"
4. Focus on what matters to NEW GRADUATES and ENTRY-LEVEL candidates

**OUTPUT** (valid JSON):
{{
  "companyName": "Official company name",
  "whatTheyDo": "2-3 sentences: core business, products/services, target market",
  "recentProjectsAndProducts": ["Specific product or initiative", "..."],
  "valuedSkills": ["Specific technical skill", "Soft skill", "..."],
  "typicalRoles": ["Exact entry-level role title", "..."],
  "cultureMission": "2-3 sentences on culture, values, mission (mentorship, growth, work-life balance)",
  "industryCategory": "One of: {categories}",
  "headquarters": "City, State/Country",
  "wowFacts": [
    {{"fact": "Specific impressive fact", "source": "General source, e.g. 'Company website'", "sourceUrl": "#"}}
  ]
}}

**GOOD vs BAD**:
- BAD: "Google is a technology leader"
- GOOD: "Google develops search, cloud computing (GCP), Android OS, and AI products like Gemini"
- BAD: "Hiring software engineers"
- GOOD: "Software Engineer - New Grad, Product Manager - APM Program"
"""

USER_PROMPT_EMPLOYER_RESEARCH_TEMPLATE = """Research and provide detailed, factual information about: {company_name}

Focus on:
1. What they actually do (products, services, business model)
2. Specific projects, products, or initiatives
3. Concrete skills they look for in new graduates (languages, frameworks, tools)
4. Exact entry-level role titles they typically post
5. Verifiable facts that would impress a student (size, growth, impact, awards)

Include 3 wowFacts. Avoid marketing language."""


# ===== PITCH GENERATION =====

SYSTEM_PROMPT_PITCH = """You are an expert career coach helping a student prepare for a career fair. Be CONSISTENT and DETERMINISTIC.

**RULES**:
1. Return ONLY valid JSON - no markdown, no extra text
2. Base scoring STRICTLY on the data provided - never invent information
3. Be SPECIFIC and ACTIONABLE

**ELEVATOR PITCH**:
- 75-95 words
- Structure: "Hi, I'm [name]. [Background/major]. [2-3 skills matching the company]. [One specific reason for THIS company]. [Ask for next steps]."
- Professional but conversational; no "passionate about technology", "eager to learn", "team player"

**INTERESTING FACTS**: specific and verifiable, each followed by why it matters to a new grad.

**SMART QUESTIONS**: insightful, open-ended, show research. Never "What's the culture like?".

**TOP MATCHED ROLES**: use exact role titles from the employer context when given, prioritized by the student's major and skills.

**FOLLOW-UP MESSAGE**: 2-3 sentence thank-you note to send after meeting the recruiter.

**SCORING** (each category 0-20, be realistic and differentiate between companies):
- location: 20 exact city or remote-first; 15 same metro; 10 same region/willing to relocate; 5 different region but flexible; 0 company does not hire there
- workAuthorization: 20 citizen/green card; 15 valid work visa (H1B, OPT); 10 needs sponsorship and company sponsors; 5 needs sponsorship, company rarely sponsors; 0 company does not sponsor
- major: 20 perfect match; 18 closely related; 15 related with relevant coursework; 12 transferable; 8 unrelated with projects; 3 very different
- jobType: 20 exact match; 18 slightly flexible; 15 "any"/open; 10 mismatch but adaptable; 5 strong mismatch
- skills: 20 5+ matching skills; 17 four; 14 three; 11 two; 7 one; 3 transferable only; 0 none
- resume: 20 multiple relevant internships; 17 2+ related internships; 14 one relevant internship + projects; 11 one less relevant internship; 8 strong projects only; 5 coursework projects; 2 minimal; 0 no resume

Give one sentence of reasoning per category."""

USER_PROMPT_PITCH_TEMPLATE = """Generate a personalized career fair pitch for this student:

STUDENT PROFILE:
- Name: {name}
- School: {school}
- Major: {major}
- Graduation: {graduation_year}
- Location Preference: {location}
- Work Authorization: {work_authorization}
- Job Type Preference: {job_type_preference}
- Skills: {skills}
- Preferred Roles: {preferred_roles}
- Background/Experience: {background}
- Resume Highlights: {resume_excerpt}

{company_section}

TASK:
1. Highlight skills from the profile that match the company's valued skills
2. Reference specific projects/initiatives from the company's recent work
3. Show alignment between the student's goals and the company's roles
4. Score realistic fit for THIS company (geography {location} vs {headquarters}, sponsorship, competitiveness)

OUTPUT (valid JSON only):
{{
  "companyName": "string",
  "elevatorPitch30s": "string (75-95 words)",
  "interestingFacts": ["fact 1", "fact 2", "fact 3"],
  "smartQuestions": ["question 1", "question 2", "question 3"],
  "topMatchedRoles": ["role 1", "role 2", "role 3"],
  "followUpMessage": "string",
  "scoreBreakdown": {{
    "location": {{"score": 0, "reason": "string"}},
    "workAuthorization": {{"score": 0, "reason": "string"}},
    "major": {{"score": 0, "reason": "string"}},
    "jobType": {{"score": 0, "reason": "string"}},
    "skills": {{"score": 0, "reason": "string"}},
    "resume": {{"score": 0, "reason": "string"}}
  }}
}}"""


def build_research_prompts(company_name: str) -> tuple[str, str]:
    """Return (system, user) prompts for researching one employer."""
    system = SYSTEM_PROMPT_EMPLOYER_RESEARCH.format(categories=", ".join(INDUSTRY_CATEGORIES))
    user = USER_PROMPT_EMPLOYER_RESEARCH_TEMPLATE.format(company_name=company_name)
    return system, user


def _company_section(company_name: str, context: Optional[EmployerContext]) -> str:
    lines = ["COMPANY:", f"- Company Name: {company_name}"]
    if context is not None:
        lines.extend([
            f"- What They Do: {context.what_they_do}",
            f"- Industry: {context.industry_category}",
            f"- Headquarters: {context.headquarters or 'Unknown'}",
            f"- Valued Skills: {', '.join(context.valued_skills) or 'Unknown'}",
            f"- Typical Roles They Hire: {', '.join(context.typical_roles) or 'Unknown'}",
            f"- Culture & Mission: {context.culture_mission or 'Unknown'}",
            f"- Recent Notable Projects: {' | '.join(context.recent_projects_and_products) or 'Unknown'}",
        ])
    return "\n".join(lines)


def build_pitch_prompts(
    profile: UserProfileSnapshot,
    company_name: str,
    context: Optional[EmployerContext] = None,
) -> tuple[str, str]:
    """Return (system, user) prompts for generating a pitch."""
    user = USER_PROMPT_PITCH_TEMPLATE.format(
        name=profile.name or "the student",
        school=profile.school or "Not specified",
        major=profile.major or "Not specified",
        graduation_year=profile.graduation_year or "Not specified",
        location=profile.location or "Open to any location",
        work_authorization=profile.work_authorization or "Not specified",
        job_type_preference=profile.job_type_preference or "Open to any",
        skills=", ".join(profile.skills) or "No specific skills listed",
        preferred_roles=", ".join(profile.preferred_roles) or "Not specified",
        background=profile.background or "Not provided",
        resume_excerpt=profile.resume_text[:RESUME_EXCERPT_CHARS] or "No resume provided",
        company_section=_company_section(company_name, context),
        headquarters=(context.headquarters if context and context.headquarters else company_name),
    )
    return SYSTEM_PROMPT_PITCH, user
