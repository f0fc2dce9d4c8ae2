"""Shared fixtures: settings on a temp SQLite file and a service factory."""

from typing import Optional

import pytest

from resume_analyzer.config import Settings
from resume_analyzer.database import Database
from resume_analyzer.services.analysis import ResumeAnalysisService
from resume_analyzer.services.resume_store import ResumeRecordStore

from tests.factories import FakeAIClient


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'resumes.db'}",
        upload_dir=str(tmp_path / "uploads"),
        gemini_api_key="",
        analysis_timeout_seconds=10.0,
        ai_timeout_seconds=5.0,
    )


@pytest.fixture
async def database(settings):
    db = Database(settings)
    await db.init()
    yield db
    await db.shutdown()


@pytest.fixture
def store(database) -> ResumeRecordStore:
    return ResumeRecordStore(database)


@pytest.fixture
def build_service(settings, store):
    def _build(ai_client: Optional[FakeAIClient] = None, **overrides) -> ResumeAnalysisService:
        svc_settings = settings.model_copy(update=overrides) if overrides else settings
        return ResumeAnalysisService(svc_settings, ai_client or FakeAIClient(), store)
    return _build
