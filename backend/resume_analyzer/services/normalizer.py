"""
Normalization of raw AI output into a strict ResumeAnalysis.

normalize_response() is total: any input string yields either
Ok(ResumeAnalysis) or Err(SchemaValidationError). Missing or mistyped
fields fall back to defaults (None for scalars, [] for sequences). Only an
unusable rating fails the record.
"""
import json
import math
import re
from typing import Any, Callable, List, Optional

from ..errors import SchemaValidationError
from ..results import Err, Ok, Result
from ..schemas.resume import (
    RATING_MAX,
    RATING_MIN,
    AIFeedback,
    CertificationEntry,
    EducationEntry,
    PersonalDetails,
    ProjectEntry,
    ResumeAnalysis,
    ResumeContent,
    Skills,
    WorkExperienceEntry,
)

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


# ============================================================================
# Field coercion helpers
# ============================================================================

def strip_code_fences(raw: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` if present."""
    text = raw.strip()
    if text.startswith("```"):
        text = _FENCE_OPEN.sub("", text, count=1)
        text = _FENCE_CLOSE.sub("", text, count=1)
    return text.strip()


def _as_dict(val: Any) -> dict:
    return val if isinstance(val, dict) else {}


def _as_str(val: Any) -> Optional[str]:
    """Strings pass through (blank -> None), numbers are stringified, anything else is None."""
    if isinstance(val, bool):
        return None
    if isinstance(val, str):
        stripped = val.strip()
        return stripped or None
    if isinstance(val, (int, float)) and not (isinstance(val, float) and not math.isfinite(val)):
        return str(val)
    return None


def _as_str_list(val: Any) -> List[str]:
    if isinstance(val, str):
        val = [val]
    if not isinstance(val, list):
        return []
    items = (_as_str(v) for v in val)
    return [v for v in items if v is not None]


def _as_entries(val: Any, build: Callable[[dict], Any]) -> list:
    if not isinstance(val, list):
        return []
    return [build(v) for v in val if isinstance(v, dict)]


def _as_rating(val: Any) -> Optional[float]:
    """Numeric value of the rating, or None when it is not a usable number."""
    if isinstance(val, bool):
        return None
    if isinstance(val, int):
        # Clamp before float(): very long integers overflow it
        return float(min(max(val, RATING_MIN), RATING_MAX))
    if isinstance(val, float):
        number = val
    elif isinstance(val, str):
        try:
            number = float(val.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return min(max(number, RATING_MIN), RATING_MAX)


# ============================================================================
# Section builders
# ============================================================================

def _personal_details(data: dict) -> PersonalDetails:
    return PersonalDetails(
        name=_as_str(data.get("name")),
        email=_as_str(data.get("email")),
        phone=_as_str(data.get("phone")),
        linkedin=_as_str(data.get("linkedin")),
        portfolio=_as_str(data.get("portfolio")),
        location=_as_str(data.get("location")),
    )


def _work_experience(data: dict) -> WorkExperienceEntry:
    return WorkExperienceEntry(
        company=_as_str(data.get("company")),
        position=_as_str(data.get("position")),
        duration=_as_str(data.get("duration")),
        responsibilities=_as_str_list(data.get("responsibilities")),
    )


def _education(data: dict) -> EducationEntry:
    return EducationEntry(
        degree=_as_str(data.get("degree")),
        institution=_as_str(data.get("institution")),
        year=_as_str(data.get("year")),
        gpa=_as_str(data.get("gpa")),
    )


def _project(data: dict) -> ProjectEntry:
    return ProjectEntry(
        name=_as_str(data.get("name")),
        description=_as_str(data.get("description")),
        technologies=_as_str_list(data.get("technologies")),
    )


def _certification(data: dict) -> CertificationEntry:
    return CertificationEntry(
        name=_as_str(data.get("name")),
        issuer=_as_str(data.get("issuer")),
        date=_as_str(data.get("date")),
    )


def _resume_content(data: dict) -> ResumeContent:
    return ResumeContent(
        summary=_as_str(data.get("summary")),
        work_experience=_as_entries(data.get("work_experience"), _work_experience),
        education=_as_entries(data.get("education"), _education),
        projects=_as_entries(data.get("projects"), _project),
        certifications=_as_entries(data.get("certifications"), _certification),
    )


def _skills(data: dict) -> Skills:
    return Skills(
        technical_skills=_as_str_list(data.get("technical_skills")),
        soft_skills=_as_str_list(data.get("soft_skills")),
    )


# ============================================================================
# Entry point
# ============================================================================

def normalize_payload(data: Any) -> Result[ResumeAnalysis]:
    """Normalize an already-parsed JSON value."""
    # Some models wrap the object in a one-element list
    if isinstance(data, list) and len(data) == 1:
        data = data[0]
    if not isinstance(data, dict):
        return Err(SchemaValidationError("malformed json"))

    feedback = _as_dict(data.get("ai_feedback"))
    rating = _as_rating(feedback.get("rating"))
    if rating is None:
        return Err(SchemaValidationError("missing rating"))

    return Ok(ResumeAnalysis(
        personal_details=_personal_details(_as_dict(data.get("personal_details"))),
        resume_content=_resume_content(_as_dict(data.get("resume_content"))),
        skills=_skills(_as_dict(data.get("skills"))),
        ai_feedback=AIFeedback(
            rating=rating,
            rating_explanation=_as_str(feedback.get("rating_explanation")),
            improvement_areas=_as_str_list(feedback.get("improvement_areas")),
            suggested_skills=_as_str_list(feedback.get("suggested_skills")),
            strengths=_as_str_list(feedback.get("strengths")),
        ),
    ))


def normalize_response(raw: str) -> Result[ResumeAnalysis]:
    """Strip fences, parse JSON and normalize into a ResumeAnalysis."""
    # ValueError covers JSONDecodeError and oversized integer literals
    try:
        data = json.loads(strip_code_fences(raw or ""))
    except (ValueError, RecursionError):
        return Err(SchemaValidationError("malformed json"))
    return normalize_payload(data)
