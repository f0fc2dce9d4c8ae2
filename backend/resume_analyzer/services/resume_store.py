"""
Persistence for analyzed resumes.
Each create runs in its own transaction; list/get never see partial rows.
"""
import logging
from datetime import datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ..database import Database
from ..errors import NotFoundError, PersistenceError
from ..models.resume import Resume
from ..results import Err, Ok, Result
from ..schemas.resume import ResumeAnalysis, ResumeRecord, ResumeSummary

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back out
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_record(row: Resume) -> ResumeRecord:
    return ResumeRecord(
        id=row.id,
        file_name=row.file_name,
        created_at=_as_utc(row.created_at),
        personal_details=row.personal_details,
        resume_content=row.resume_content,
        skills=row.skills,
        ai_feedback=row.ai_feedback,
    )


class ResumeRecordStore:
    def __init__(self, database: Database):
        self.database = database

    async def create(self, analysis: ResumeAnalysis, file_name: str) -> Result[ResumeRecord]:
        """Insert a normalized analysis; id and created_at are assigned here."""
        now = datetime.now(timezone.utc)
        row = Resume(
            file_name=file_name,
            personal_details=analysis.personal_details.model_dump(),
            resume_content=analysis.resume_content.model_dump(),
            skills=analysis.skills.model_dump(),
            ai_feedback=analysis.ai_feedback.model_dump(),
            created_at=now,
            updated_at=now,
        )
        try:
            async with self.database.session() as session:
                session.add(row)
                await session.flush()
                record = _to_record(row)
        except SQLAlchemyError as e:
            logger.error("Failed to save resume '%s': %s", file_name, e)
            return Err(PersistenceError(f"Failed to save resume: {e}"))

        logger.info("Saved resume id=%s file=%s", record.id, file_name)
        return Ok(record)

    async def list_summaries(self) -> Result[List[ResumeSummary]]:
        """Summary projections, most recent first."""
        query = (
            select(
                Resume.id,
                Resume.file_name,
                Resume.personal_details["name"].as_string().label("name"),
                Resume.personal_details["email"].as_string().label("email"),
                Resume.ai_feedback["rating"].as_float().label("rating"),
                Resume.created_at,
            )
            .order_by(Resume.created_at.desc(), Resume.id.desc())
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(query)
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error("Failed to list resumes: %s", e)
            return Err(PersistenceError(f"Failed to fetch resumes: {e}"))

        return Ok([
            ResumeSummary(
                id=row.id,
                file_name=row.file_name,
                name=row.name,
                email=row.email,
                rating=row.rating,
                created_at=_as_utc(row.created_at),
            )
            for row in rows
        ])

    async def get_by_id(self, resume_id: int) -> Result[ResumeRecord]:
        try:
            async with self.database.session() as session:
                row = await session.get(Resume, resume_id)
                record = _to_record(row) if row is not None else None
        except SQLAlchemyError as e:
            logger.error("Failed to load resume %s: %s", resume_id, e)
            return Err(PersistenceError(f"Failed to fetch resume details: {e}"))

        if record is None:
            return Err(NotFoundError(f"Resume {resume_id} not found"))
        return Ok(record)
