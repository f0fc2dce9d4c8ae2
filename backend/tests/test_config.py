"""Unit tests for settings loading and record model configuration."""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from resume_analyzer.config import Settings
from resume_analyzer.schemas.resume import ResumeRecord


@pytest.mark.unit
def test_settings_read_environment_case_insensitively(monkeypatch):
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    monkeypatch.setenv("max_text_chars", "1234")

    settings = Settings(_env_file=None)

    assert settings.gemini_model == "gemini-test"
    assert settings.max_text_chars == 1234


@pytest.mark.unit
def test_settings_ignore_unknown_environment(monkeypatch):
    monkeypatch.setenv("NOT_A_SETTING", "x")

    settings = Settings(_env_file=None)

    assert not hasattr(settings, "not_a_setting")


@pytest.mark.unit
def test_cors_origins_are_split_and_trimmed():
    settings = Settings(_env_file=None, cors_origins=" http://a.test , ,http://b.test")

    assert settings.get_cors_origins() == ["http://a.test", "http://b.test"]


@pytest.mark.unit
def test_record_validates_from_attributes():
    row = SimpleNamespace(
        id=3,
        file_name="cv.pdf",
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        personal_details={"name": "Jane"},
        resume_content={},
        skills={},
        ai_feedback={"rating": 7.0},
    )

    record = ResumeRecord.model_validate(row)

    assert record.id == 3
    assert record.personal_details.name == "Jane"
    assert record.ai_feedback.rating == 7.0
