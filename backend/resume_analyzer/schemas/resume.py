"""
Resume analysis schemas - the strict record shape every reader depends on
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime


RATING_MIN = 0.0
RATING_MAX = 10.0


# ============================================================================
# Nested Sections
# ============================================================================

class PersonalDetails(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    portfolio: Optional[str] = None
    location: Optional[str] = None


class WorkExperienceEntry(BaseModel):
    company: Optional[str] = None
    position: Optional[str] = None
    duration: Optional[str] = None
    responsibilities: List[str] = Field(default_factory=list)


class EducationEntry(BaseModel):
    degree: Optional[str] = None
    institution: Optional[str] = None
    year: Optional[str] = None
    gpa: Optional[str] = None


class ProjectEntry(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)


class CertificationEntry(BaseModel):
    name: Optional[str] = None
    issuer: Optional[str] = None
    date: Optional[str] = None


class ResumeContent(BaseModel):
    summary: Optional[str] = None
    work_experience: List[WorkExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)
    certifications: List[CertificationEntry] = Field(default_factory=list)


class Skills(BaseModel):
    technical_skills: List[str] = Field(default_factory=list)
    soft_skills: List[str] = Field(default_factory=list)


class AIFeedback(BaseModel):
    rating: float = Field(ge=RATING_MIN, le=RATING_MAX)
    rating_explanation: Optional[str] = None
    improvement_areas: List[str] = Field(default_factory=list)
    suggested_skills: List[str] = Field(default_factory=list)
    strengths: List[str] = Field(default_factory=list)


# ============================================================================
# Records
# ============================================================================

class ResumeAnalysis(BaseModel):
    """Normalized AI output, not yet persisted (no id / created_at)."""
    personal_details: PersonalDetails = Field(default_factory=PersonalDetails)
    resume_content: ResumeContent = Field(default_factory=ResumeContent)
    skills: Skills = Field(default_factory=Skills)
    ai_feedback: AIFeedback


class ResumeRecord(ResumeAnalysis):
    id: int
    file_name: str = Field(min_length=1)
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ResumeSummary(BaseModel):
    """List projection - excludes the nested content."""
    id: int
    file_name: str
    name: Optional[str] = None
    email: Optional[str] = None
    rating: Optional[float] = None
    created_at: datetime
