"""
Resume model - one row per analyzed upload, nested sections stored as JSON documents
"""
from sqlalchemy import Column, Integer, String, DateTime, Index, JSON
from sqlalchemy.dialects.postgresql import JSONB
from datetime import datetime, timezone
from ..database import Base

# JSONB on PostgreSQL so nested fields can be queried and indexed
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Resume(Base):
    """Normalized analysis of a single resume. Rows are written once and never updated."""
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    file_name = Column(String(255), nullable=False)

    personal_details = Column(JSONDocument, nullable=False)
    resume_content = Column(JSONDocument, nullable=False)
    skills = Column(JSONDocument, nullable=False)
    ai_feedback = Column(JSONDocument, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (
        Index("idx_resumes_created_at", "created_at"),
    )


# Summary listing projects these; declared after the class so the JSON
# path renders per dialect (->> on PostgreSQL, json_extract on SQLite)
Index("idx_resumes_name", Resume.personal_details["name"].as_string())
Index("idx_resumes_email", Resume.personal_details["email"].as_string())
