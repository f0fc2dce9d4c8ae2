"""Integration tests for ResumeRecordStore on SQLite."""

import asyncio
import json

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from resume_analyzer.errors import NotFoundError, PersistenceError
from resume_analyzer.services.normalizer import normalize_response

from tests.factories import VALID_RESPONSE, make_response


def _analysis(data=None):
    return normalize_response(json.dumps(data or VALID_RESPONSE)).unwrap()


@pytest.mark.integration
async def test_create_assigns_id_and_created_at(store):
    result = await store.create(_analysis(), "jane.pdf")

    assert result.ok
    record = result.value
    assert record.id >= 1
    assert record.file_name == "jane.pdf"
    assert record.created_at.tzinfo is not None
    assert record.personal_details.name == "Jane Doe"


@pytest.mark.integration
async def test_ids_increase(store):
    first = (await store.create(_analysis(), "a.pdf")).unwrap()
    second = (await store.create(_analysis(), "b.pdf")).unwrap()

    assert second.id > first.id


@pytest.mark.integration
async def test_get_by_id_round_trip(store):
    created = (await store.create(_analysis(), "jane.pdf")).unwrap()

    fetched = (await store.get_by_id(created.id)).unwrap()
    again = (await store.get_by_id(created.id)).unwrap()

    assert fetched == created
    assert again == fetched


@pytest.mark.integration
async def test_get_unknown_id_is_not_found(store):
    result = await store.get_by_id(99999)

    assert not result.ok
    assert isinstance(result.error, NotFoundError)
    assert result.error.status_code == 404


@pytest.mark.integration
async def test_list_projects_summary_fields(store):
    created = (await store.create(_analysis(), "jane.pdf")).unwrap()

    summaries = (await store.list_summaries()).unwrap()

    assert len(summaries) == 1
    summary = summaries[0]
    assert summary.id == created.id
    assert summary.file_name == "jane.pdf"
    assert summary.name == "Jane Doe"
    assert summary.email == "jane@x.com"
    assert summary.rating == 8
    assert summary.created_at == created.created_at


@pytest.mark.integration
async def test_list_handles_missing_name(store):
    await store.create(_analysis(make_response(personal_details=None)), "anon.pdf")

    summaries = (await store.list_summaries()).unwrap()

    assert summaries[0].name is None
    assert summaries[0].email is None


@pytest.mark.integration
async def test_list_is_most_recent_first_under_concurrent_creates(store):
    results = await asyncio.gather(*[
        store.create(_analysis(), f"resume-{i}.pdf") for i in range(8)
    ])
    assert all(r.ok for r in results)

    summaries = (await store.list_summaries()).unwrap()

    assert len(summaries) == 8
    stamps = [s.created_at for s in summaries]
    assert stamps == sorted(stamps, reverse=True)
    assert {s.id for s in summaries} == {r.value.id for r in results}


@pytest.mark.integration
async def test_empty_store_lists_nothing(store):
    assert (await store.list_summaries()).unwrap() == []


@pytest.mark.integration
async def test_storage_failure_becomes_persistence_error(store, monkeypatch):
    async def broken_flush(self, *args, **kwargs):
        raise OperationalError("INSERT", {}, Exception("disk I/O error"))

    monkeypatch.setattr("sqlalchemy.ext.asyncio.AsyncSession.flush", broken_flush)

    result = await store.create(_analysis(), "jane.pdf")

    assert not result.ok
    assert isinstance(result.error, PersistenceError)
    monkeypatch.undo()
    assert (await store.list_summaries()).unwrap() == []


@pytest.mark.integration
async def test_summary_fields_are_indexed(database):
    async with database.engine.connect() as conn:
        result = await conn.execute(text(
            "SELECT name FROM sqlite_master WHERE type = 'index' AND tbl_name = 'resumes'"
        ))
        names = {row[0] for row in result}

    assert {"idx_resumes_created_at", "idx_resumes_name", "idx_resumes_email"} <= names
