from .resume import (
    PersonalDetails, WorkExperienceEntry, EducationEntry, ProjectEntry,
    CertificationEntry, ResumeContent, Skills, AIFeedback,
    ResumeAnalysis, ResumeRecord, ResumeSummary,
)

__all__ = [
    "PersonalDetails", "WorkExperienceEntry", "EducationEntry", "ProjectEntry",
    "CertificationEntry", "ResumeContent", "Skills", "AIFeedback",
    "ResumeAnalysis", "ResumeRecord", "ResumeSummary",
]
